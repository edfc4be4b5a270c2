# =============================================================================
# Agents Package — Client-Side Orchestration
# =============================================================================
# Coordinates calls to the remote agents and owns the resulting state:
#   - analysis.py: upload → audit → best-effort market-context enrichment
#   - chat.py: user message → context → orchestrator agent → transcript
#   - session.py: composition root wiring both to one gateway
# =============================================================================
