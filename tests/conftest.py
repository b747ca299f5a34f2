import os
from pathlib import Path

import pytest
from PySide6.QtCore import QSettings

# Qt must render offscreen during tests.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def tmp_settings(tmp_path: Path):
    """Point QSettings at an INI file in a temp folder so tests do not leak into each other."""
    QSettings.setDefaultFormat(QSettings.IniFormat)
    QSettings.setPath(QSettings.IniFormat, QSettings.UserScope, str(tmp_path))
    s = QSettings("arcview.org", "ArcView")
    s.clear()
    yield s
    s.clear()
