"""SamplePool - sample pool crowdfunding backend."""

__version__ = "0.1.0"
