"""Configuração do pytest para o projeto adaptive_applet."""

import sys
from pathlib import Path

# Adiciona src/ e a raiz do repo ao PYTHONPATH (imports absolutos e tests.fakes)
root_path = Path(__file__).parent.parent
for path in (root_path / "src", root_path):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
