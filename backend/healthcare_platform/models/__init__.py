from healthcare_platform.models.appointment import Appointment, AppointmentStatus
from healthcare_platform.models.audit_log import AuditLog
from healthcare_platform.models.billing_code import BillingCode
from healthcare_platform.models.billing_item import BillingItem
from healthcare_platform.models.compliance_review import ComplianceReview, ComplianceReviewStatus
from healthcare_platform.models.department import Department
from healthcare_platform.models.insurance_policy import InsurancePolicy
from healthcare_platform.models.legal_hold import LegalHold, LegalHoldStatus
from healthcare_platform.models.locale_setting import LocaleSetting
from healthcare_platform.models.notification import DeliveryStatus, Notification, NotificationChannel
from healthcare_platform.models.organization import Organization, OrganizationStatus
from healthcare_platform.models.patient import Patient
from healthcare_platform.models.role import Role

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "AuditLog",
    "BillingCode",
    "BillingItem",
    "ComplianceReview",
    "ComplianceReviewStatus",
    "DeliveryStatus",
    "Department",
    "InsurancePolicy",
    "LegalHold",
    "LegalHoldStatus",
    "LocaleSetting",
    "Notification",
    "NotificationChannel",
    "Organization",
    "OrganizationStatus",
    "Patient",
    "Role",
]
