"""cratectl — build, install and unpack single-binary crates.

A crate bundles one compiled executable with its metadata into a single
JSON document that can be saved, pulled over HTTP and deployed.
"""

from cratectl.version import __version__

__all__: list[str] = ["__version__"]
