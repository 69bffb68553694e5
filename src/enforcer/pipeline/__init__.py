"""
Enforcer Pipeline - Replay legality orchestration.

This module handles:
- Check registry and dispatch by controller type (EnforcerEngine)
- Output contract validation
- Parallel batch analysis across frame tables
"""

from enforcer.pipeline.orchestrator import EnforcerEngine, analyze_frames

__all__ = ["EnforcerEngine", "analyze_frames"]
