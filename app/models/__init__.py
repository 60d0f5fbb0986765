from .admin import Admin
from .contact import Contact
from .attendance import Attendance
