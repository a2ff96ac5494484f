"""
HireFlow: job board core with an application pipeline and candidate matching.
"""

from hireflow.utils.constants import APP_NAME, VERSION

__app_name__ = APP_NAME
__version__ = VERSION
