"""
Each module must import cleanly as the first import of a fresh interpreter.
"""
import os
import subprocess
import sys

import pytest

SRC_DIR = os.path.join(os.path.dirname(__file__), '..', 'editor', 'src')


@pytest.mark.parametrize("module", [
    'sticker_editor.models.transform',
    'sticker_editor.models.scene',
    'sticker_editor.utils.transform_math',
    'sticker_editor.utils.css_transform',
    'sticker_editor.utils.canvas_fitter',
    'sticker_editor.services.compositor',
    'sticker_editor.services.edit_session',
    'sticker_editor.headless',
])
def test_module_imports_standalone(module):
    env = dict(os.environ, PYTHONPATH=os.path.abspath(SRC_DIR))
    result = subprocess.run(
        [sys.executable, '-c', f'import {module}'],
        capture_output=True, text=True, env=env, timeout=60,
    )
    assert result.returncode == 0, result.stderr
