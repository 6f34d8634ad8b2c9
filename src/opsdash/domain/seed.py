"""Seed input for a fresh entity store.

The built-in sample dataset is the one the dashboard ships with. A JSON
seed file can replace it; keys may be snake_case or camelCase and
contract ``totalValue`` entries are ignored (totals are derived).
"""

from __future__ import annotations

import json
from datetime import UTC, date, datetime
from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from opsdash.domain.entities import (
    Client,
    Contract,
    ContractMilestone,
    Intern,
    Project,
    TeamMember,
)
from opsdash.domain.types import InternStatus, ProjectStatus


class SeedData(BaseModel):
    """Initial contents for the five collections, in display order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    clients: tuple[Client, ...] = ()
    projects: tuple[Project, ...] = ()
    team_members: tuple[TeamMember, ...] = ()
    interns: tuple[Intern, ...] = ()
    contracts: tuple[Contract, ...] = ()


def load_seed_file(path: Path) -> SeedData:
    """Parse a JSON seed file. Raises ``pydantic.ValidationError`` on bad data."""
    raw = json.loads(path.read_text(encoding="utf-8"))
    return SeedData.model_validate(raw)


def empty_seed() -> SeedData:
    return SeedData()


def _milestone(
    milestone_id: str,
    title: str,
    description: str,
    due: date,
    amount: int,
    *,
    done: bool = False,
) -> ContractMilestone:
    return ContractMilestone(
        id=milestone_id,
        title=title,
        description=description,
        due_date=due,
        amount=Decimal(amount),
        is_completed=done,
    )


def builtin_seed() -> SeedData:
    """The sample dataset: 4 clients, 4 projects, 4 team members, 3 interns, 2 contracts."""
    clients = (
        Client(
            id="client1",
            name="John Smith",
            email="john.smith@example.com",
            phone="555-123-4567",
            company="Smith Enterprises",
            address="123 Main St, City, Country",
            created_at=datetime(2023, 1, 15, tzinfo=UTC),
        ),
        Client(
            id="client2",
            name="Sarah Johnson",
            email="sarah.johnson@example.com",
            phone="555-987-6543",
            company="Johnson Solutions",
            address="456 Oak Ave, City, Country",
            created_at=datetime(2023, 2, 20, tzinfo=UTC),
        ),
        Client(
            id="client3",
            name="Michael Davis",
            email="michael.davis@example.com",
            phone="555-555-5555",
            company="Davis Technologies",
            address="789 Pine Blvd, City, Country",
            created_at=datetime(2023, 3, 10, tzinfo=UTC),
        ),
        Client(
            id="client4",
            name="Emma Wilson",
            email="emma.wilson@example.com",
            phone="555-111-2222",
            company="Wilson Group",
            address="321 Elm St, City, Country",
            created_at=datetime(2023, 4, 5, tzinfo=UTC),
        ),
    )
    team_members = (
        TeamMember(
            id="team1",
            name="Alex Chen",
            email="alex.chen@blizon.com",
            phone="555-222-3333",
            position="Senior Developer",
            department="Engineering",
            joined_date=date(2022, 6, 10),
        ),
        TeamMember(
            id="team2",
            name="Maya Singh",
            email="maya.singh@blizon.com",
            phone="555-444-5555",
            position="Project Manager",
            department="Management",
            joined_date=date(2021, 9, 15),
        ),
        TeamMember(
            id="team3",
            name="David Kim",
            email="david.kim@blizon.com",
            phone="555-666-7777",
            position="UI/UX Designer",
            department="Design",
            joined_date=date(2022, 2, 20),
        ),
        TeamMember(
            id="team4",
            name="Sophia Martinez",
            email="sophia.martinez@blizon.com",
            phone="555-888-9999",
            position="Backend Developer",
            department="Engineering",
            joined_date=date(2022, 11, 5),
        ),
    )
    projects = (
        Project(
            id="project1",
            name="E-commerce Website Redesign",
            client_id="client1",
            description=(
                "Complete redesign of client's e-commerce platform "
                "with new features and improved UX"
            ),
            status=ProjectStatus.ACTIVE,
            start_date=date(2023, 5, 1),
            end_date=date(2023, 8, 15),
            team_member_ids=("team1", "team3"),
        ),
        Project(
            id="project2",
            name="Mobile App Development",
            client_id="client2",
            description="Creating a native mobile application for iOS and Android platforms",
            status=ProjectStatus.WORKING,
            start_date=date(2023, 3, 10),
            end_date=date(2023, 7, 20),
            team_member_ids=("team1", "team4"),
        ),
        Project(
            id="project3",
            name="CRM Integration",
            client_id="client3",
            description="Integration of custom CRM solution with existing client systems",
            status=ProjectStatus.CLOSED,
            start_date=date(2023, 1, 5),
            end_date=date(2023, 4, 30),
            team_member_ids=("team2", "team4"),
        ),
        Project(
            id="project4",
            name="Marketing Dashboard",
            client_id="client4",
            description="Analytics dashboard for marketing performance tracking",
            status=ProjectStatus.ACTIVE,
            start_date=date(2023, 6, 1),
            end_date=date(2023, 9, 15),
            team_member_ids=("team2", "team3"),
        ),
    )
    interns = (
        Intern(
            id="intern1",
            name="Ryan Lee",
            email="ryan.lee@example.edu",
            phone="555-123-0001",
            university="State University",
            department="Engineering",
            status=InternStatus.ONBOARD,
            start_date=date(2023, 6, 1),
            end_date=date(2023, 8, 31),
        ),
        Intern(
            id="intern2",
            name="Priya Patel",
            email="priya.patel@example.edu",
            phone="555-123-0002",
            university="Tech Institute",
            department="Design",
            status=InternStatus.ONBOARD,
            start_date=date(2023, 6, 1),
            end_date=date(2023, 8, 31),
        ),
        Intern(
            id="intern3",
            name="James Wilson",
            email="james.wilson@example.edu",
            phone="555-123-0003",
            university="City College",
            department="Marketing",
            status=InternStatus.POSTPONED,
            start_date=date(2023, 9, 1),
            end_date=date(2023, 11, 30),
        ),
    )
    contracts = (
        Contract(
            id="contract1",
            title="E-commerce Platform Development",
            client_id="client1",
            project_id="project1",
            description=(
                "Development of a full-featured e-commerce platform "
                "with payment processing and inventory management"
            ),
            start_date=date(2023, 5, 1),
            end_date=date(2023, 8, 15),
            milestones=(
                _milestone(
                    "milestone1-1",
                    "Requirements Gathering and Design",
                    "Complete all requirements gathering and design mockups",
                    date(2023, 5, 15),
                    10000,
                    done=True,
                ),
                _milestone(
                    "milestone1-2",
                    "Frontend Development",
                    "Complete all frontend pages and components",
                    date(2023, 6, 30),
                    15000,
                ),
                _milestone(
                    "milestone1-3",
                    "Backend Development and Integration",
                    "Complete backend services and integration",
                    date(2023, 7, 30),
                    15000,
                ),
                _milestone(
                    "milestone1-4",
                    "Testing and Launch",
                    "Complete testing and launch of the platform",
                    date(2023, 8, 15),
                    10000,
                ),
            ),
        ),
        Contract(
            id="contract2",
            title="Mobile Application Development",
            client_id="client2",
            project_id="project2",
            description=(
                "Development of a cross-platform mobile application with offline capabilities"
            ),
            start_date=date(2023, 3, 10),
            end_date=date(2023, 7, 20),
            milestones=(
                _milestone(
                    "milestone2-1",
                    "Design and Prototyping",
                    "Complete application design and interactive prototype",
                    date(2023, 4, 10),
                    8000,
                    done=True,
                ),
                _milestone(
                    "milestone2-2",
                    "Core Functionality",
                    "Develop core application functionality",
                    date(2023, 5, 20),
                    12000,
                    done=True,
                ),
                _milestone(
                    "milestone2-3",
                    "Additional Features and API Integration",
                    "Implement additional features and API integration",
                    date(2023, 6, 30),
                    12000,
                ),
                _milestone(
                    "milestone2-4",
                    "Testing and App Store Submission",
                    "Complete testing and submit to app stores",
                    date(2023, 7, 20),
                    8000,
                ),
            ),
        ),
    )
    return SeedData(
        clients=clients,
        projects=projects,
        team_members=team_members,
        interns=interns,
        contracts=contracts,
    )


__all__ = ["SeedData", "builtin_seed", "empty_seed", "load_seed_file"]

