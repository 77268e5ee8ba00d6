from healthcare_platform.repositories.appointment_repository import AppointmentRepository
from healthcare_platform.repositories.audit_log_repository import AuditLogRepository
from healthcare_platform.repositories.billing_code_repository import BillingCodeRepository
from healthcare_platform.repositories.billing_item_repository import BillingItemRepository
from healthcare_platform.repositories.compliance_review_repository import ComplianceReviewRepository
from healthcare_platform.repositories.department_repository import DepartmentRepository
from healthcare_platform.repositories.insurance_policy_repository import InsurancePolicyRepository
from healthcare_platform.repositories.legal_hold_repository import LegalHoldRepository
from healthcare_platform.repositories.locale_setting_repository import LocaleSettingRepository
from healthcare_platform.repositories.notification_repository import NotificationRepository
from healthcare_platform.repositories.organization_repository import OrganizationRepository
from healthcare_platform.repositories.patient_repository import PatientRepository
from healthcare_platform.repositories.role_repository import RoleRepository

__all__ = [
    "AppointmentRepository",
    "AuditLogRepository",
    "BillingCodeRepository",
    "BillingItemRepository",
    "ComplianceReviewRepository",
    "DepartmentRepository",
    "InsurancePolicyRepository",
    "LegalHoldRepository",
    "LocaleSettingRepository",
    "NotificationRepository",
    "OrganizationRepository",
    "PatientRepository",
    "RoleRepository",
]
