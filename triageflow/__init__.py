"""Decision logic for issue and pull request triage: reviewers, labels, mentions and messages."""

__version__ = "0.1.0"