"""
Demo Data Generation Script for Project Manager
Registers a few users and fills each one with projects and tasks through the
same service layer the API uses, so ownership and defaults behave as in production.

    python -m app.scripts.seed_demo_data --users 3 --projects 4
"""
import argparse
import asyncio
import random
from datetime import date, timedelta

from faker import Faker

from app.config import settings
from app.database import AsyncSessionLocal, engine, init_db
from app.logging_setup import setup_logging
from app.models.project import STATUSES
from app.models.tasks import PRIORITIES
from app.schemas.project import ProjectCreate
from app.schemas.task import TaskCreate
from app.schemas.user import UserRegister
from app.services import projects as project_service
from app.services import tasks as task_service
from app.services import users as user_service
from app.services.users import identity_of

fake = Faker()

DEMO_PASSWORD = "demo-password"

PROJECT_THEMES = {
    "Software Development": [
        ("Design the data model", "Agree on tables and relations"),
        ("Implement the REST endpoints", "CRUD plus ownership checks"),
        ("Write integration tests", "Cover auth and isolation"),
        ("Set up CI pipeline", "Lint, test and build on every push"),
    ],
    "Marketing": [
        ("Draft the campaign brief", "Audience, channels, budget"),
        ("Produce social media assets", "Images and copy for three networks"),
        ("Schedule newsletter", "Segment the mailing list"),
    ],
    "Operations": [
        ("Inventory current servers", "List hardware and licences"),
        ("Write the recovery runbook", "Step by step restore procedure"),
        ("Run a failover drill", "Measure recovery time"),
    ],
}


async def create_users(db, count: int):
    identities = []
    for _ in range(count):
        username = fake.unique.user_name()
        user, _token = await user_service.register_user(
            db,
            UserRegister(
                username=username,
                email=f"{username}@example.com",
                password=DEMO_PASSWORD,
            ),
        )
        identities.append(identity_of(user))
    print(f"✅ Created {len(identities)} users (password: {DEMO_PASSWORD})")
    return identities


async def create_projects_with_tasks(db, identity, project_count: int) -> tuple[int, int]:
    projects = tasks = 0
    for _ in range(project_count):
        theme, task_templates = random.choice(list(PROJECT_THEMES.items()))
        start = date.today() - timedelta(days=random.randint(0, 60))
        project = await project_service.create_project(
            db,
            identity,
            ProjectCreate(
                name=f"{theme}: {fake.catch_phrase()}",
                description=fake.sentence(nb_words=12),
                status=random.choice(STATUSES),
                start_date=start,
                end_date=start + timedelta(days=random.randint(14, 120)),
            ),
        )
        projects += 1

        for title, description in task_templates:
            await task_service.create_task(
                db,
                identity,
                TaskCreate(
                    title=title,
                    description=description,
                    status=random.choice(STATUSES),
                    priority=random.choice(PRIORITIES),
                    due_date=start + timedelta(days=random.randint(1, 90)),
                    project_id=project.id,
                ),
            )
            tasks += 1

    # A couple of loose tasks that belong to no project
    for _ in range(2):
        await task_service.create_task(
            db,
            identity,
            TaskCreate(title=fake.bs().capitalize(), priority=random.choice(PRIORITIES)),
        )
        tasks += 1

    return projects, tasks


async def seed(user_count: int, project_count: int) -> None:
    await init_db()
    async with AsyncSessionLocal() as db:
        identities = await create_users(db, user_count)
        total_projects = total_tasks = 0
        for identity in identities:
            p, t = await create_projects_with_tasks(db, identity, project_count)
            total_projects += p
            total_tasks += t

    print(f"\n📊 Summary:")
    print(f"   - Users: {len(identities)}")
    print(f"   - Projects: {total_projects}")
    print(f"   - Tasks: {total_tasks}")
    await engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Populate the database with demo data")
    parser.add_argument("--users", type=int, default=3)
    parser.add_argument("--projects", type=int, default=3, help="projects per user")
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL)
    asyncio.run(seed(args.users, args.projects))


if __name__ == "__main__":
    main()
