"""pushrisk - deterministic impact and risk scoring for git pushes."""

__version__ = "0.1.0"
