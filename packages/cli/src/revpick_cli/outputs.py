"""Publish selection results as GitHub Actions step outputs."""

from __future__ import annotations

import logging
import os
import uuid

logger = logging.getLogger(__name__)


def write_github_outputs(outputs: dict[str, str], output_path: str | None = None) -> bool:
    """Append outputs to the $GITHUB_OUTPUT file. Returns False when not running in Actions."""
    output_path = output_path or os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return False

    with open(output_path, "a", encoding="utf-8") as f:
        for name, value in outputs.items():
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                f.write(f"{name}={value}\n")
    logger.debug("Wrote %d output(s) to %s", len(outputs), output_path)
    return True
