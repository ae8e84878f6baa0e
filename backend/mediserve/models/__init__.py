from mediserve.models.user import User
from mediserve.models.pharmacy import Pharmacy
from mediserve.models.medicine import Medicine
from mediserve.models.notification import Notification, NotificationType
from mediserve.models.prescription import Prescription, PrescriptionStatus

__all__ = ["User", "Pharmacy", "Medicine", "Notification", "NotificationType", "Prescription", "PrescriptionStatus"]
