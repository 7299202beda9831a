import logging

from storefront.utils.logger import configure_logging, get_logger, mask_token


def test_library_loggers_leave_root_alone():
    root = logging.getLogger()
    before = list(root.handlers)

    logger = get_logger("storefront.services.cart_service")
    logger.info("nothing configured yet")

    assert root.handlers == before
    assert any(isinstance(h, logging.NullHandler) for h in logging.getLogger("storefront").handlers)


def test_configure_logging_installs_stdout_handler_once():
    root = logging.getLogger()
    saved, level = root.handlers[:], root.level
    for h in saved:
        root.removeHandler(h)
    try:
        configure_logging("debug")
        configure_logging("error")

        [handler] = root.handlers
        assert isinstance(handler, logging.StreamHandler)
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for h in root.handlers[:]:
            root.removeHandler(h)
        for h in saved:
            root.addHandler(h)
        root.setLevel(level)


def test_mask_token():
    assert mask_token(None) == "<none>"
    assert mask_token("abc") == "***"
    assert mask_token("demo-token") == "demo..."
