import logging

cookie_logger = logging.getLogger("crumbs.cookies")
internal_logger = logging.getLogger("crumbs.internal")
