"""Runtime location helpers for rod-cli.

This subpackage locates the user-level ~/.rod/ directory and the
package-bundled default template.
"""

from rod_cli.runtime.home import get_package_asset_root, get_rod_home

__all__ = [
    "get_package_asset_root",
    "get_rod_home",
]
