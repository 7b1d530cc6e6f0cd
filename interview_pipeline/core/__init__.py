"""
Core pipeline components.

Transcription, confidence estimation, answer analysis, follow-up generation,
assessment aggregation, proctoring, camera validation, speech synthesis and
the orchestrator that coordinates them.
"""
