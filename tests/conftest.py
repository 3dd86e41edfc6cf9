from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.annotation_builder import AnnotationBuilder


@pytest.fixture
def annotations(tmp_path: Path) -> AnnotationBuilder:
    """Provide an annotation file builder rooted at the pytest tmp_path."""
    return AnnotationBuilder(tmp_path)
