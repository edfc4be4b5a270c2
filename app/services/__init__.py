# =============================================================================
# Services Package — Building Blocks Used by the Orchestrators
# =============================================================================
#   - gateway.py: uniform AgentResult envelope for all four remote agents
#   - uploads.py: ledger upload → asset references
#   - context.py: pure payload assembly (ledger frame, goal suffix)
#   - transcript.py: append-only conversation log
#   - ledger.py: ledger validation and the goal set
#   - export.py: audit snapshot → downloadable JSON
#   - errors.py: ValidationError / UploadError / AgentCallError /
#     AgentLogicError / EnrichmentError
# =============================================================================
