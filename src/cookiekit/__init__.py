from .version import __version__ as __version__

__title__ = "cookiekit"
__description__ = "A cookie jar for HTTP clients with Netscape cookie-file support."
__url__ = "https://github.com/saudadez21/cookiekit"
__author__ = "Saudade Z"
__email__ = "saudadez217@gmail.com"
__license__ = "Apache-2.0"
