# =============================================================================
# CONFTEST - Raiz do projeto
# =============================================================================
# Garante que o pacote quiz_session seja importável sem instalação
# =============================================================================

import sys
from pathlib import Path

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))
