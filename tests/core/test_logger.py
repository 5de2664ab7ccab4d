from loguru import logger

from coachplan.core.logger import setup_logger


def test_file_sink_receives_messages(tmp_path):
    log_file = tmp_path / "logs" / "coachplan.log"

    setup_logger(level="INFO", log_file=str(log_file))
    logger.info("extraction finished")
    logger.debug("hidden below INFO")
    logger.complete()

    content = log_file.read_text(encoding="utf-8")
    assert "extraction finished" in content
    assert "hidden below INFO" not in content

    setup_logger(level="WARNING")
