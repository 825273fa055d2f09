"""Kernel types — tagged step outcome."""
from mp_middleware.kernel.types.outcome import Break, Continue, Fail, StepOutcome

__all__ = ["Break", "Continue", "Fail", "StepOutcome"]
