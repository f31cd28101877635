"""cpr: compiler-flag resolver.

Turns package names into compiler or linker flags by asking pkg-config first
and falling back to a local ``$CPRPATH/<pkg>/{include,lib}`` layout.
"""

__version__ = "0.1.0"
