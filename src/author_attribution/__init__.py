"""Author Attribution - attribute passages of text to candidate authors."""

__version__ = "0.1.0"
