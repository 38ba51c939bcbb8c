"""Seed a development database with users, lookups, stages, customers and products.

Run with `python -m scripts.seed_data` from the project root.
"""

from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from decimal import Decimal

from faker import Faker
from sqlalchemy import select

from crm.core.config import get_config
from crm.core.logging import configure_logging
from crm.database.db import create_all, get_db_session
from crm.models import Customer, User, UserRole
from crm.services.custom_field_service import CustomFieldService
from crm.services.customer_service import CustomerService
from crm.services.lead_source_service import LeadSourceService
from crm.services.pipeline_stage_service import PipelineStageService
from crm.services.quote_service import QuoteService
from crm.services.stage_transition_service import StageTransitionService
from crm.services.tag_service import TagService
from crm.services.task_service import TaskService
from crm.services.user_service import UserService

logger = logging.getLogger(__name__)
fake = Faker()

ADMIN_EMAIL = "admin@admin.com"
DEFAULT_PASSWORD = "password"
EMPLOYEE_COUNT = 10
CUSTOMER_COUNT = 10
TASKS_PER_CUSTOMER = 3

LEAD_SOURCES = ["Website", "Online AD", "Twitter", "LinkedIn", "Webinar", "Trade Show", "Referral"]
TAGS = ["Priority", "VIP"]
# The first stage created becomes the default.
PIPELINE_STAGES = ["Lead", "Contact Made", "Proposal Made", "Proposal Rejected", "Customer"]
CUSTOM_FIELDS = ["Birth Date", "Company", "Job Title", "Family Members"]
PRODUCTS = [
    ("Product 1", "12.99"),
    ("Product 2", "2.99"),
    ("Product 3", "55.99"),
    ("Product 4", "99.99"),
    ("Product 5", "1.99"),
    ("Product 6", "12.99"),
    ("Product 7", "15.99"),
    ("Product 8", "29.99"),
    ("Product 9", "33.99"),
    ("Product 10", "62.99"),
    ("Product 11", "42.99"),
    ("Product 12", "112.99"),
    ("Product 13", "602.99"),
    ("Product 14", "129.99"),
    ("Product 15", "1200.99"),
]


def seed() -> None:
    with get_db_session() as session:
        if session.scalar(select(User).where(User.email == ADMIN_EMAIL)) is not None:
            logger.info("seed.skipped", extra={"event": "seed.skipped", "reason": "admin user exists"})
            return

        users = UserService(db=session)
        admin = users.create_user("Test Admin", ADMIN_EMAIL, DEFAULT_PASSWORD, role=UserRole.ADMIN)
        employees = [
            users.create_user(fake.name(), fake.unique.company_email(), DEFAULT_PASSWORD)
            for _ in range(EMPLOYEE_COUNT)
        ]

        lead_sources = LeadSourceService(db=session)
        for name in LEAD_SOURCES:
            lead_sources.create(name)

        tags = [TagService(db=session).create(name) for name in TAGS]

        registry = PipelineStageService(db=session)
        stages = [registry.create(name) for name in PIPELINE_STAGES]

        customers = CustomerService(db=session)
        transitions = StageTransitionService(db=session, notifier=customers.notifier)
        tasks = TaskService(db=session, notifier=customers.notifier)
        for _ in range(CUSTOMER_COUNT):
            customer: Customer = customers.create(
                {
                    "first_name": fake.first_name(),
                    "last_name": fake.last_name(),
                    "email": fake.unique.email(),
                    "phone_number": fake.phone_number(),
                    "description": fake.sentence(),
                    "tag_ids": [random.choice(tags).id],
                },
                actor_user_id=admin.id,
            )
            transitions.change_stage(customer.id, random.choice(stages).id, actor_user_id=admin.id)
            transitions.change_employee(customer.id, random.choice(employees).id, actor_user_id=admin.id)
            for _ in range(TASKS_PER_CUSTOMER):
                tasks.create(
                    customer.id,
                    fake.sentence(),
                    user_id=customer.employee_id,
                    due_date=date.today() + timedelta(days=random.randint(-5, 30)),
                )

        custom_fields = CustomFieldService(db=session)
        for name in CUSTOM_FIELDS:
            custom_fields.create(name)

        quotes = QuoteService(db=session)
        for name, price in PRODUCTS:
            quotes.create_product(name, Decimal(price))

        logger.info(
            "seed.completed",
            extra={
                "event": "seed.completed",
                "employees": len(employees),
                "customers": CUSTOMER_COUNT,
                "stages": len(stages),
            },
        )


if __name__ == "__main__":
    configure_logging()
    if get_config().DATABASE_URL.startswith("sqlite"):
        create_all()
    seed()
