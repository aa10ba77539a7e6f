"""GitHub pull request statistics: review latency, merge time and open PR age."""

__version__ = "0.1.0"
