"""Version information for aurorawake-core."""

__version__ = "0.1.0"
__version_info__ = tuple(int(i) for i in __version__.split(".") if i.isdigit())

# Package metadata
__title__ = "aurorawake-core"
__description__ = "Alarm scheduling engine for the AuroraWake alarm clock"
__author__ = "AuroraWake"
__author_email__ = "dev@aurorawake.app"
__license__ = "MIT"
__url__ = "https://github.com/aurorawake/aurorawake-core"
