"""
Experiment tracking helpers (optional MLflow backend).

MLflow is only imported when tracking is requested, so it stays an optional
dependency. Without it, runs proceed untracked and a warning is logged.
"""
from __future__ import annotations

import importlib.util
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional


def _mlflow_active() -> bool:
    if importlib.util.find_spec("mlflow") is None:
        return False
    import mlflow  # type: ignore

    return mlflow.active_run() is not None


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Open an MLflow run when enabled and available; yields whether one is active."""
    if not enabled:
        yield False
        return
    if importlib.util.find_spec("mlflow") is None:
        logging.warning("Tracking requested but mlflow is not installed; continuing without it")
        yield False
        return
    import mlflow  # type: ignore

    if log_dir is not None:
        mlflow.set_tracking_uri((log_dir.resolve() / "mlruns").as_uri())
    with mlflow.start_run(run_name=run_name):
        yield True


def log_params(params: Dict[str, object]) -> None:
    if _mlflow_active():
        import mlflow  # type: ignore

        mlflow.log_params(params)


def log_metrics(metrics: Dict[str, float]) -> None:
    if _mlflow_active():
        import mlflow  # type: ignore

        mlflow.log_metrics(metrics)


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    if _mlflow_active():
        import mlflow  # type: ignore

        mlflow.log_artifact(str(path), artifact_path=artifact_path)
