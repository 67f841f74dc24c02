import logging
from typing import Any, Dict, List
from urllib.parse import urlparse

from models.agency_record import AgencyRecord
from models.enums import AgencyStatus, AgencyType, PricingModel, enum_values
from services.legal_forms import normalize_legal_form


CLOSED_FIELDS = {
    "type": enum_values(AgencyType),
    "pricing_model": enum_values(PricingModel),
    "status": enum_values(AgencyStatus),
}


class AgencyValidator:
    def __init__(self, strict_enums: bool = True):
        self.strict_enums = strict_enums
        self.validation_stats = {
            'total_records': 0,
            'valid_records': 0,
            'invalid_records': 0,
            'validation_errors': []
        }

    def validate_url(self, url: str) -> bool:
        """Loose homepage check: a scheme and a host."""
        if not url or not isinstance(url, str):
            return False
        try:
            parsed = urlparse(url)
            return parsed.scheme in ['http', 'https'] and bool(parsed.netloc)
        except ValueError:
            return False

    def validate_required_fields(self, record: AgencyRecord) -> List[str]:
        errors = []
        if not record.agency or not record.agency.strip():
            errors.append("Missing required field: agency")
        return errors

    def validate_enum_fields(self, record: AgencyRecord) -> List[str]:
        """Empty values are allowed; non-empty ones must be in the closed set."""
        errors = []
        for field, allowed in CLOSED_FIELDS.items():
            value = getattr(record, field)
            if value and value not in allowed:
                errors.append(f"Invalid {field}: {value!r} (expected one of {sorted(allowed)})")
        return errors

    def validate_optional_fields(self, record: AgencyRecord) -> List[str]:
        warnings = []
        if record.url and not self.validate_url(record.url):
            warnings.append(f"URL does not look like a homepage: {record.url}")
        if record.location and len(record.location) > 200:
            warnings.append(f"Location field too long: {len(record.location)} characters")
        return warnings

    def validate_record(self, record: AgencyRecord, position: int) -> bool:
        errors = self.validate_required_fields(record)
        if self.strict_enums:
            errors.extend(self.validate_enum_fields(record))
        for warning in self.validate_optional_fields(record):
            logging.debug(f"Record {position} ({record.agency}): {warning}")

        if errors:
            self.validation_stats['validation_errors'].append({
                'position': position,
                'agency': record.agency,
                'errors': errors,
            })
            for error in errors:
                logging.warning(f"Rejected record {position} ({record.agency!r}): {error}", extra={"step": "validate", "status": "rejected"})
            return False
        return True

    def validate_all_records(self, records: List[AgencyRecord]) -> List[AgencyRecord]:
        """Keep the records that pass validation; duplicates are allowed."""
        valid: List[AgencyRecord] = []
        self.validation_stats['total_records'] += len(records)
        for position, record in enumerate(records):
            if self.validate_record(record, position):
                valid.append(record)
                self.validation_stats['valid_records'] += 1
            else:
                self.validation_stats['invalid_records'] += 1
        return valid

    def clean_record(self, record: AgencyRecord) -> AgencyRecord:
        """Trim text fields and canonicalize the legal form."""
        updates: Dict[str, Any] = {}
        for field in ['agency', 'url', 'type', 'pricing_model', 'location', 'status']:
            value = getattr(record, field)
            if value != value.strip():
                updates[field] = value.strip()
        legal_form = normalize_legal_form(record.legal_form)
        if legal_form != record.legal_form:
            updates['legal_form'] = legal_form
        return record.model_copy(update=updates) if updates else record

    def get_validation_stats(self) -> Dict:
        """Return validation statistics."""
        return self.validation_stats.copy()
