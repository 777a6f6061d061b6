import sys
import os
import logging
from sqlalchemy.orm import Session

# Ensure we can import app modules
sys.path.append(os.getcwd())

from app.core.exceptions import AppException
from app.core.permissions import Entity
from app.database import SessionLocal, init_db
from app.schemas.auth import Identity
from app.services.records import RecordService

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

SEED_IDENTITY = Identity(
    subject="seed-script",
    name="Seed Script",
    email="seed@localhost",
    groups=["SUPER_ADMIN"],
    authenticated=True,
)

EMPLOYEES = [
    {
        "employeeId": "EMP-0001",
        "fullName": "Amelia Nguyen",
        "email": "amelia.nguyen@example.org",
        "department": "Human Resources",
        "position": "HR Manager",
        "hireDate": "2019-03-04",
        "salary": 98000,
        "payFrequency": "FORTNIGHTLY",
    },
    {
        "employeeId": "EMP-0002",
        "fullName": "Daniel Okafor",
        "email": "daniel.okafor@example.org",
        "department": "Engineering",
        "position": "Senior Engineer",
        "hireDate": "2021-08-16",
    },
    {
        "employeeId": "EMP-0003",
        "fullName": "Priya Raman",
        "email": "priya.raman@example.org",
        "department": "Finance",
        "position": "Payroll Officer",
        "employmentType": "CONTRACT",
        "status": "ON_LEAVE",
        "hireDate": "2022-11-01",
    },
]

ROLE_ASSIGNMENTS = [
    {
        "userId": "amelia.nguyen",
        "userEmail": "amelia.nguyen@example.org",
        "userName": "Amelia Nguyen",
        "role": "HR_ADMIN",
        "department": "Human Resources",
    },
]

SYSTEM_CONFIG = [
    {"configKey": "leave.annualDefault", "configValue": 20, "description": "Annual leave days for new hires"},
    {"configKey": "leave.sickDefault", "configValue": 10, "description": "Sick leave days for new hires"},
]


def _seed(service: RecordService, entity: Entity, rows):
    for row in rows:
        try:
            service.create(entity, row)
            logger.info(f"Created {entity.value}: {row.get('employeeId') or row.get('userId') or row.get('configKey')}")
        except AppException as e:
            logger.warning(f"Skipped {entity.value}: {e.message}")


def seed_employees():
    init_db()
    db: Session = SessionLocal()
    try:
        service = RecordService(db, SEED_IDENTITY)
        _seed(service, Entity.EMPLOYEE, EMPLOYEES)
        _seed(service, Entity.USER_ROLE, ROLE_ASSIGNMENTS)
        _seed(service, Entity.SYSTEM_CONFIG, SYSTEM_CONFIG)
        logger.info("Seeding complete.")
    finally:
        db.close()

if __name__ == "__main__":
    seed_employees()
