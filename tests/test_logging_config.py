import logging

from life3d.logging_config import setup_logging
from life3d.world import World


def test_setup_logging_routes_world_debug(tmp_path):
    log_file = tmp_path / "life3d.log"
    setup_logging(logging.DEBUG, log_file=str(log_file))
    setup_logging(logging.DEBUG, log_file=str(log_file))
    logger = logging.getLogger("life3d")
    assert len(logger.handlers) == 2

    previous, world = World.build(2, seed=1)
    world.update(previous)
    for handler in logger.handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "Built world dims=2" in text
    assert "Advanced 8 cells" in text

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def test_setup_logging_closes_replaced_handlers(tmp_path):
    setup_logging(logging.INFO, log_file=str(tmp_path / "first.log"))
    logger = logging.getLogger("life3d")
    old_file_handler = next(h for h in logger.handlers if isinstance(h, logging.FileHandler))

    setup_logging(logging.INFO, log_file=str(tmp_path / "second.log"))
    assert old_file_handler not in logger.handlers
    assert old_file_handler.stream is None

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
