# =============================================================================
# Ledger Insight Agent — Client-Side Orchestration Layer
# =============================================================================
# Lets a user upload a transaction ledger and converse with four remote AI
# agents (financial audit, master orchestrator, news sentinel, actuary).
# This package owns request preparation, response normalisation, the chat
# transcript and the async request lifecycle. Rendering lives elsewhere.
#
# Package structure:
#   app/
#   ├── api/          → FastAPI routes the presentation layer calls
#   ├── agents/       → Orchestrators (analysis, chat) + session wiring
#   ├── models/       → Pydantic V2 domain models and API schemas
#   └── services/     → Gateway, uploads, context builder, transcript,
#                        ledger intake, export, error taxonomy
# =============================================================================
