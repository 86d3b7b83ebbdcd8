import logging

import pytest

from cloth_sim import Cloth, ClothConfig, CollisionMode
from cloth_sim.logging_config import setup_logging


@pytest.fixture
def package_logger():
    yield
    for name in ("cloth_sim", "cloth_sim.collision.contact"):
        logger = logging.getLogger(name)
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)


def quad_cloth():
    return Cloth(ClothConfig(nx=4, ny=4, dx=1.0, dy=1.0, center=(0.0, 0.2, 0.0),
                             collision_mode=CollisionMode.QUADS, seed=0))


def test_setup_logging_writes_file(tmp_path, package_logger):
    log_file = tmp_path / "cloth.log"
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))
    assert logger.name == "cloth_sim"

    cloth = quad_cloth()
    cloth.grab(cloth.positions[0])
    cloth.time_step()
    for h in logger.handlers:
        h.flush()
    text = log_file.read_text()
    assert "cloth_sim.topology - INFO - Built 4x4" in text
    assert "cloth_sim.constraints.grab - DEBUG - Grabbed" in text
    # contact chatter is off by default
    assert "Quad contact pinned" not in text


def test_contact_messages_opt_in(tmp_path, package_logger):
    log_file = tmp_path / "contacts.log"
    logger = setup_logging(logging.DEBUG, log_file=str(log_file), contacts=True)
    quad_cloth().time_step()
    for h in logger.handlers:
        h.flush()
    assert "Quad contact pinned 16 particles" in log_file.read_text()


def test_repeated_setup_replaces_handlers(package_logger):
    setup_logging()
    logger = setup_logging(logging.WARNING)
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
