# Namespace for pipeline steps
from .parse_csv import ParseCsv  # noqa: F401
from .normalize_agencies import NormalizeAgencies  # noqa: F401
from .validate_agencies import ValidateAgencies  # noqa: F401
