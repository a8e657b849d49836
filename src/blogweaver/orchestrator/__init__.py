"""Wizard orchestration."""

from __future__ import annotations

from blogweaver.orchestrator.wizard import PostSink, WizardSession, WizardStepError

__all__ = ["PostSink", "WizardSession", "WizardStepError"]
