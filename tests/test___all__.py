from typing import Any


def test___all__(pytester: Any) -> None:
    pytester.makepyfile(
        test_a="""
            from crumbs import *
        """
    )
    result = pytester.runpytest("-vv")
    result.assert_outcomes(passed=0, errors=0)
