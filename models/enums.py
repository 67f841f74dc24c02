from __future__ import annotations

from enum import Enum


class AgencyType(str, Enum):
    EXCLUSIVE = "exclusive"
    MASS = "mass"


class PricingModel(str, Enum):
    COMMISSION = "commission"
    BASE_FEE = "base_fee"


class AgencyStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class LegalForm(str, Enum):
    """Known legal-entity forms; records may still carry other strings."""

    GMBH = "GmbH"
    AG = "AG"
    SE = "SE"
    UG = "UG"
    KG = "KG"
    KGAA = "KGaA"
    OHG = "OHG"
    GBR = "GbR"
    EK = "e.K."
    GMBH_CO_KG = "GmbH & Co. KG"
    AG_CO_KG = "AG & Co. KG"
    SE_CO_KG = "SE & Co. KG"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


def enum_values(enum_cls: type[Enum]) -> frozenset[str]:
    return frozenset(m.value for m in enum_cls)
