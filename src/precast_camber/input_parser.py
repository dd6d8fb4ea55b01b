"""Parse YAML project files into camber calculation inputs.

Reads a project YAML file, checks every section and field for presence and
type, applies defaults for optional fields, and builds :class:`CamberInputs`.
Domain ranges (positive span, f'c above f'ci, ...) are left to the engine's
validator so that a file and a form report the same messages.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models.inputs import CamberInputs, MemberType, OffcutSide
from .models.strands import StrandPattern
from .utils.constants import INCHES_PER_FOOT
from .utils.measurements import combine_span_parts, parse_measurement


# ---------------------------------------------------------------------------
# Schema definitions
# ---------------------------------------------------------------------------
# Each leaf entry is a tuple:
#   (type, required, default, validator_or_None)
# ``length`` fields take a number or tape-measure text such as 40'-7".

_VALID_MEMBER_TYPES = {m.value for m in MemberType}
_VALID_OFFCUT_SIDES = {s.value for s in OffcutSide}


def _in_set(valid: set[str]):
    """Return a validator that checks membership in *valid*."""
    return lambda v: v in valid


_LENGTH = "length"

SCHEMA: dict[str, dict[str, tuple]] = {
    "project": {
        "name":        (str, False, None, None),
        "number":      (str, False, None, None),
        "mark_number": (str, False, None, None),
        "id_number":   (str, False, None, None),
        "notes":       (str, False, None, None),
    },
    "member": {
        "type":               (str,     False, MemberType.HOLLOW_CORE.value,
                               _in_set(_VALID_MEMBER_TYPES)),
        "span":               (_LENGTH, True,  None, None),   # ft (numbers), text in ft/in
        "release_strength":   (float,   True,  None, None),   # psi
        "concrete_strength":  (float,   True,  None, None),   # psi
        "moment_of_inertia":  (float,   True,  None, None),   # in^4
        "dead_load":          (float,   True,  None, None),   # lb/ft
        "live_load":          (float,   False, None, None),   # lb/ft
        "centroid_height":    (float,   False, None, None),   # in
        "product_width":      (_LENGTH, False, None, None),   # in
        "offcut_side":        (str,     False, None, _in_set(_VALID_OFFCUT_SIDES)),
        "composite_topping":  (bool,    False, False, None),
    },
}

_PATTERN_SECTIONS = ("strand_pattern", "top_strand_pattern")


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

class InputError(Exception):
    """Raised when the YAML input is invalid or incomplete."""


def _coerce(value: Any, expected_type: type) -> Any:
    """Attempt to coerce *value* to *expected_type*.

    YAML reads ``3500`` as ``int`` where a ``float`` is expected; ints are
    promoted.  Booleans are never accepted as numbers.
    """
    if expected_type is float and isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if expected_type is str and isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, expected_type):
        return value
    raise InputError(
        f"Expected type {expected_type.__name__}, got "
        f"{type(value).__name__} for value {value!r}"
    )


def _coerce_length(value: Any, unit_inches: float) -> float:
    """Number in the field's own unit, tape-measure text, or split span parts."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        inches = parse_measurement(value)
        if inches is not None:
            return inches / unit_inches
    if isinstance(value, dict) and unit_inches == INCHES_PER_FOOT:
        # span as the entry form splits it: feet, inches, eighths
        try:
            return combine_span_parts(
                float(value.get("feet") or 0),
                float(value.get("inches") or 0),
                str(value.get("fraction", "0")),
            )
        except (TypeError, ValueError) as exc:
            raise InputError(f"Cannot read {value!r} as a span") from exc
    raise InputError(f"Cannot read {value!r} as a length")


def _validate_section(
    data: dict[str, Any],
    schema: dict[str, tuple],
    section_path: str,
    errors: list[str],
) -> dict[str, Any]:
    """Validate *data* against a flat field *schema*.

    Appends human-readable messages to *errors* for every problem found and
    returns the coerced values with defaults filled in.
    """
    validated: dict[str, Any] = {}
    for field, (ftype, required, default, validator) in schema.items():
        path_str = f"{section_path}.{field}"
        if data.get(field) is None:
            if required:
                errors.append(f"Missing required field: {path_str}")
                continue
            validated[field] = default
            continue

        raw = data[field]
        try:
            if ftype == _LENGTH:
                unit = INCHES_PER_FOOT if field == "span" else 1.0
                coerced = _coerce_length(raw, unit)
            else:
                coerced = _coerce(raw, ftype)
        except InputError:
            expected = "number or length text" if ftype == _LENGTH else ftype.__name__
            errors.append(
                f"{path_str}: expected {expected}, "
                f"got {type(raw).__name__} ({raw!r})"
            )
            continue

        if validator is not None and not validator(coerced):
            errors.append(f"{path_str}: value {coerced!r} is not one of the allowed options")
            continue

        validated[field] = coerced

    unknown = sorted(set(data) - set(schema))
    for field in unknown:
        errors.append(f"{section_path}.{field}: unknown field")

    return validated


def _parse_pattern(
    data: Any,
    section_path: str,
    errors: list[str],
) -> StrandPattern | None:
    """Build a :class:`StrandPattern` from either accepted layout.

    A mapping with ``patternId`` is treated as a pattern-store payload
    (camelCase); anything else uses the model's own field names.
    """
    if not isinstance(data, dict):
        errors.append(f"Section '{section_path}' must be a mapping")
        return None

    try:
        if "patternId" in data:
            return StrandPattern.from_payload(data)
        return StrandPattern.model_validate(data)
    except ValidationError as exc:
        for err in exc.errors():
            location = ".".join(str(part) for part in err["loc"])
            prefix = f"{section_path}.{location}" if location else section_path
            errors.append(f"{prefix}: {err['msg']}")
    except (TypeError, ValueError) as exc:
        errors.append(f"{section_path}: {exc}")
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_input(yaml_path: str | Path) -> CamberInputs:
    """Read and validate a project YAML file.

    Parameters
    ----------
    yaml_path:
        Filesystem path to the YAML input file.

    Returns
    -------
    CamberInputs
        Inputs ready for :meth:`CamberEngine.calculate`.

    Raises
    ------
    FileNotFoundError
        If *yaml_path* does not exist.
    InputError
        If the file is malformed (the message lists every problem found).
    """
    path = Path(yaml_path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {yaml_path}")

    with open(path, "r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise InputError(f"YAML syntax error: {exc}") from exc

    if not isinstance(raw, dict):
        raise InputError("YAML root must be a mapping (dict)")

    errors: list[str] = []
    config: dict[str, Any] = {}

    # ------------------------------------------------------------------
    # 1. Flat sections
    # ------------------------------------------------------------------
    for section_name, field_schema in SCHEMA.items():
        section_data = raw.get(section_name)
        if section_data is None:
            has_required = any(req for (_, req, _, _) in field_schema.values())
            if has_required:
                errors.append(f"Missing required section: {section_name}")
            config[section_name] = {
                field: default
                for field, (_, _, default, _) in field_schema.items()
            }
            continue

        if not isinstance(section_data, dict):
            errors.append(f"Section '{section_name}' must be a mapping")
            config[section_name] = {}
            continue

        config[section_name] = _validate_section(
            section_data, field_schema, section_name, errors
        )

    # ------------------------------------------------------------------
    # 2. Strand patterns
    # ------------------------------------------------------------------
    patterns: dict[str, StrandPattern | None] = {}
    for section_name in _PATTERN_SECTIONS:
        if raw.get(section_name) is None:
            patterns[section_name] = None
            continue
        patterns[section_name] = _parse_pattern(raw[section_name], section_name, errors)

    unknown = sorted(set(raw) - set(SCHEMA) - set(_PATTERN_SECTIONS))
    for section_name in unknown:
        errors.append(f"Unknown section: {section_name}")

    if errors:
        _raise(errors)

    # ------------------------------------------------------------------
    # 3. Assemble
    # ------------------------------------------------------------------
    project = config["project"]
    member = config["member"]
    try:
        return CamberInputs(
            span=member["span"],
            member_type=member["type"],
            release_strength=member["release_strength"],
            concrete_strength=member["concrete_strength"],
            moment_of_inertia=member["moment_of_inertia"],
            dead_load=member["dead_load"],
            live_load=member["live_load"],
            centroid_height=member["centroid_height"],
            product_width=member["product_width"],
            offcut_side=member["offcut_side"],
            composite_topping=member["composite_topping"],
            strand_pattern=patterns["strand_pattern"],
            top_strand_pattern=patterns["top_strand_pattern"],
            project_name=project["name"],
            project_number=project["number"],
            mark_number=project["mark_number"],
            id_number=project["id_number"],
            notes=project["notes"],
        )
    except ValidationError as exc:
        _raise([
            f"member.{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ])


def _raise(errors: list[str]) -> None:
    bullet_list = "\n  - ".join(errors)
    raise InputError(
        f"Input validation failed with {len(errors)} error(s):\n"
        f"  - {bullet_list}"
    )


# ---------------------------------------------------------------------------
# Template generator
# ---------------------------------------------------------------------------

_TEMPLATE_YAML = """\
# Precast Camber Input File
# =========================
# Numbers use the units in the comments.  Lengths may also be written the
# way they read off a tape: span: 40'-7"   product_width: 42 1/2
# A span may also be split: span: {feet: 40, inches: 7, fraction: "1/2"}

project:
  name: "PROJECT_NAME"
  number: "P-0000"
  mark_number: "HC-1"
  id_number: ""
  notes: ""

member:
  type: hollow-core             # beam | double-tee | hollow-core | single-tee |
                                # solid-slab | wall-panel | stadia
  span: 40.0                    # ft - simple span
  release_strength: 3500        # psi - f'ci at detensioning
  concrete_strength: 9000       # psi - 28-day f'c
  moment_of_inertia: 12000      # in4 - gross section
  dead_load: 450                # lb/ft - self weight
  live_load: 200                # lb/ft - optional, delete if none
  centroid_height: 4.0          # in - neutral axis above bottom (yb)
  product_width: 48             # in - optional, finished width
  # offcut_side: L1             # L1 = left removed, L2 = right removed
  composite_topping: false      # true selects the composite multipliers

strand_pattern:
  pattern_id: "101-75"          # label suffix is the pulling force %
  position: Bottom
  counts_by_size:
    "1/2": 6
  grade_counts:
    "1/2":
      "270": 6
  coordinates:                  # in - x from left edge, y from bottom
    - {size: "1/2", order: 1, x: 4.0, y: 1.75}
    - {size: "1/2", order: 2, x: 12.0, y: 1.75}
    - {size: "1/2", order: 3, x: 20.0, y: 1.75}
    - {size: "1/2", order: 4, x: 28.0, y: 1.75}
    - {size: "1/2", order: 5, x: 36.0, y: 1.75}
    - {size: "1/2", order: 6, x: 44.0, y: 1.75}

# top_strand_pattern:           # optional, same layout as strand_pattern
"""


def generate_template() -> str:
    """Return a complete sample YAML input template as a string.

    The returned text is ready to be written to a file and edited by the
    user.
    """
    return _TEMPLATE_YAML
