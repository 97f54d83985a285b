"""Shared fixtures for tests."""
import pytest
from django.test import Client as HttpClient

from apps.briefs.models import Brief
from apps.clients.models import Client
from apps.designers.models import DesignerProfile


@pytest.fixture
def client_user(db, django_user_model):
    return django_user_model.objects.create_user(username="client", password="testpass123")


@pytest.fixture
def sample_client(db, client_user):
    """Client owning the test briefs."""
    return Client.objects.create(
        user=client_user,
        name="Acme Coffee",
        email="owner@acme.example",
        company_name="Acme Coffee Co.",
        match_credits=3,
    )


@pytest.fixture
def auth_client(sample_client):
    """HTTP client logged in as the owner of ``sample_client``."""
    client = HttpClient()
    client.login(username="client", password="testpass123")
    return client


@pytest.fixture
def staff_client(db, django_user_model):
    django_user_model.objects.create_user(username="staff", password="testpass123", is_staff=True)
    client = HttpClient()
    client.login(username="staff", password="testpass123")
    return client


@pytest.fixture
def sample_brief(db, sample_client):
    """Current-schema brief for a branding project."""
    return Brief.objects.create(
        client=sample_client,
        design_category="branding-logo",
        timeline_type="standard",
        budget_range="mid",
        project_description="Logo and brand identity for a specialty coffee roaster.",
        design_style_keywords=["modern", "minimal"],
        industry="Food & Beverage",
    )


@pytest.fixture
def legacy_brief(db, sample_client):
    """Brief stored with the legacy field set."""
    return Brief.objects.create(
        client=sample_client,
        project_type="branding-logo",
        timeline="2-4 weeks",
        budget="$2500-5000",
        requirements="New logo for our bakery.",
        styles=["Modern", "Playful"],
    )


@pytest.fixture
def make_designer(db):
    """Factory for approved, verified designers."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "first_name": f"Designer{counter['n']}",
            "last_name": "Smith",
            "email": f"designer{counter['n']}@example.com",
            "title": "Brand designer",
            "primary_categories": ["branding-logo"],
            "secondary_categories": [],
            "style_keywords": ["modern", "clean"],
            "preferred_industries": [],
            "preferred_project_sizes": ["medium"],
            "turnaround_times": {"branding-logo": 14},
            "collaboration_style": "",
            "rating": 4.5,
            "total_projects": 10,
            "is_verified": True,
            "is_approved": True,
        }
        data.update(overrides)
        return DesignerProfile.objects.create(**data)

    return _make


@pytest.fixture
def sample_designer(make_designer):
    return make_designer(first_name="Ana", last_name="Silva", email="ana@example.com")
