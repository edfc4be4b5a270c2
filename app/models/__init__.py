# =============================================================================
# Models Package — Pydantic V2 Schemas
# =============================================================================
#   - agents.py: wire envelopes exchanged with the remote agent service
#   - requests.py / responses.py: HTTP surface used by the presentation layer
#
# In-memory domain values (AuditSnapshot, ConversationTurn, LedgerFile) are
# frozen dataclasses next to the code that owns them.
# =============================================================================
