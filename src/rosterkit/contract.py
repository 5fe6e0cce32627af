"""The employee column contract shared by parsers, validator, and templates.

``EMPLOYEE_CONTRACT`` is the single source of truth for the bulk-upload
file format: the ordered field keys, which of them are mandatory, and the
accepted values of the three enumerated fields.  Existing exported
templates depend on the exact key order, so it must not change.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ColumnContract(BaseModel):
    """Ordered field keys, mandatory subset, and per-field enumerations."""

    model_config = ConfigDict(frozen=True)

    fields: tuple[str, ...]
    required: tuple[str, ...] = ()
    enumerations: dict[str, tuple[str, ...]] = {}

    def enumeration_for(self, field: str) -> tuple[str, ...] | None:
        """Return the accepted values for *field*, or None if unconstrained."""
        return self.enumerations.get(field)


STAFF_ID = "staff_id"
FIRST_NAME = "first_name"
LAST_NAME = "last_name"
EMAIL = "email"
PHONE_NUMBER = "phone_number"
GENDER = "gender"
CONTRACT_TYPE = "contract_type"
EMPLOYMENT_STATUS = "employment_status"
START_DATE = "start_date"
END_DATE = "end_date"
DEPARTMENT = "department"
JOB_ROLE = "job_role"
WORK_LOCATION = "work_location"

GENDER_VALUES: tuple[str, ...] = ("male", "female", "other", "prefer_not_to_say")

CONTRACT_TYPE_VALUES: tuple[str, ...] = (
    "permanent",
    "part_time",
    "fixed_term",
    "contractor",
    "intern",
    "temporary",
)

EMPLOYMENT_STATUS_VALUES: tuple[str, ...] = ("probation", "confirmed")

EMPLOYEE_CONTRACT = ColumnContract(
    fields=(
        STAFF_ID,
        FIRST_NAME,
        LAST_NAME,
        EMAIL,
        PHONE_NUMBER,
        GENDER,
        CONTRACT_TYPE,
        EMPLOYMENT_STATUS,
        START_DATE,
        END_DATE,
        DEPARTMENT,
        JOB_ROLE,
        WORK_LOCATION,
    ),
    required=(FIRST_NAME, LAST_NAME, EMAIL, START_DATE, DEPARTMENT, JOB_ROLE),
    enumerations={
        GENDER: GENDER_VALUES,
        CONTRACT_TYPE: CONTRACT_TYPE_VALUES,
        EMPLOYMENT_STATUS: EMPLOYMENT_STATUS_VALUES,
    },
)

# One fully populated row; end_date is left empty to show it is optional.
EXAMPLE_ROW: dict[str, str] = {
    STAFF_ID: "EMP001",
    FIRST_NAME: "Jane",
    LAST_NAME: "Doe",
    EMAIL: "jane.doe@example.com",
    PHONE_NUMBER: "+2348012345678",
    GENDER: "female",
    CONTRACT_TYPE: "permanent",
    EMPLOYMENT_STATUS: "confirmed",
    START_DATE: "2024-01-15",
    END_DATE: "",
    DEPARTMENT: "Engineering",
    JOB_ROLE: "Software Engineer",
    WORK_LOCATION: "Lagos HQ",
}
