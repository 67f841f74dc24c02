# Importing the package registers the built-in sources
from . import file_csv  # noqa: F401
from . import http_csv  # noqa: F401
