"""Application entry point for Exam Trainer."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from exam_trainer.constants.about import APP_NAME, APP_VERSION
from exam_trainer.constants.storage_constants import (
    DATA_DIR_ENV_VAR,
    DEFAULT_DATA_DIR,
    DEFAULT_QUESTION_BANK_PATH,
    QUESTION_BANK_ENV_VAR,
)
from exam_trainer.core.question_bank_loader import QuestionBankError, load_question_bank
from exam_trainer.core.services.persistence_store import PersistenceStore
from exam_trainer.core.services.question_bank import QuestionBank
from exam_trainer.ui.main_window import MainWindow
from exam_trainer.utils.logging_config import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="exam-trainer", description=f"{APP_NAME} v{APP_VERSION}")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help=f"Directory for history, mistakes and the saved session (env: {DATA_DIR_ENV_VAR}).",
    )
    parser.add_argument(
        "--questions",
        type=Path,
        default=None,
        help=f"Question bank JSON file (env: {QUESTION_BANK_ENV_VAR}).",
    )
    parser.add_argument(
        "--clear-data",
        action="store_true",
        help="Delete all stored data before starting.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def _resolve_path(cli_value: Path | None, env_var: str, default: Path) -> Path:
    if cli_value is not None:
        return cli_value
    env_value = os.environ.get(env_var)
    if env_value:
        return Path(env_value)
    return default


def main(argv: list[str] | None = None) -> None:
    """Parse options, load the question bank and launch the Qt UI."""
    args = _build_parser().parse_args(argv)
    logger = configure_logging(logging.DEBUG if args.debug else logging.INFO)
    logger.info("Starting %s v%s", APP_NAME, APP_VERSION)

    bank_path = _resolve_path(args.questions, QUESTION_BANK_ENV_VAR, DEFAULT_QUESTION_BANK_PATH)
    try:
        loaded = load_question_bank(bank_path)
    except QuestionBankError as exc:
        logger.error("Could not load question bank %s: %s", bank_path, exc)
        sys.exit(1)

    data_dir = _resolve_path(args.data_dir, DATA_DIR_ENV_VAR, DEFAULT_DATA_DIR)
    store = PersistenceStore.in_directory(data_dir)
    if args.clear_data:
        store.clear_all_data()
    logger.info("Storing data in %s", data_dir)

    app = QApplication(sys.argv[:1])
    window = MainWindow(bank=QuestionBank(loaded.questions), store=store)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
