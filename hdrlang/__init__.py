"""hdrlang - resolve ambiguous C-family headers to C, C++, Objective-C or Objective-C++."""

__version__ = "0.1.0"
