"""mediarename - rename photos and videos after their capture time.

Author: Michael Economou
Date: 2026-10-12
"""

from mediarename.config import APP_VERSION

__version__ = APP_VERSION
