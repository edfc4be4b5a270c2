# =============================================================================
# API Package — FastAPI Route Handlers
# =============================================================================
# Each module defines a FastAPI APIRouter for one feature area:
#   - analysis.py: ledger selection, goals, audit run, export, session reset
#   - chat.py: conversation with the master orchestrator agent
# =============================================================================
