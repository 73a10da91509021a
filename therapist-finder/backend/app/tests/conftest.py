# backend/app/tests/conftest.py
"""
Fixtures y helpers para pruebas end-to-end con FastAPI + pytest-asyncio.
La app corre con el store en memoria; cada cliente abre un lifespan nuevo,
así que cada test parte de un store vacío.
"""
import os
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

# ---- store en memoria (debe setearse ANTES de importar app.main) ----
os.environ["STORE_BACKEND"] = "memory"
os.environ["SEED_CSV"] = ""

# ---- asegurar imports absolutos 'app.*' ----
ROOT_DIR = Path(__file__).resolve().parents[1]   # .../backend/app
sys.path.insert(0, str(ROOT_DIR.parent))         # .../backend

from app.main import app  # noqa
from app.models.therapist import TherapistCreate, to_document  # noqa

SAMPLE_THERAPISTS = [
    {
        "name": "Dr. Sarah Ahmed",
        "gender": "Female",
        "city": "Karachi",
        "experience_years": 3,
        "email": "sarah@example.com",
        "phone": "03001234567",
        "modes": ["In-person", "Virtual telephonic"],
        "education": ["MBBS", "MD Psychiatry"],
        "prior_roles": ["3 years at Aga Khan Hospital"],
        "specialties": ["Depression", "Anxiety", "PTSD"],
        "about": "Experienced psychiatrist specializing in mood disorders and trauma",
        "fee_amount": 2500,
        "fee_currency": "PKR",
    },
    {
        "name": "Dr. Ali Khan",
        "gender": "Male",
        "city": "Lahore",
        "experience_years": 8,
        "email": "ali@example.com",
        "phone": "03007654321",
        "modes": ["Online", "Virtual video-based"],
        "education": ["PhD Psychology", "Diploma in CBT"],
        "prior_roles": ["8 years private practice", "2 years at Mayo Hospital"],
        "specialties": ["Cognitive Behavioral Therapy", "Anxiety", "OCD"],
        "about": "Cognitive behavioral therapy specialist with extensive experience",
        "fee_amount": 4000,
        "fee_currency": "PKR",
    },
    {
        "name": "Dr. Fatima Sheikh",
        "gender": "Female",
        "city": "Islamabad",
        "experience_years": 1,
        "email": "fatima@example.com",
        "phone": "03009876543",
        "modes": ["In-person"],
        "education": ["MS Clinical Psychology"],
        "prior_roles": ["1 year at PIMS"],
        "specialties": ["Child Psychology", "Developmental Disorders"],
        "about": "Child psychology specialist focusing on developmental issues",
        "fee_amount": 1500,
        "fee_currency": "PKR",
    },
    {
        "name": "Dr. Hassan Raza",
        "gender": "Male",
        "city": "Karachi",
        "experience_years": 15,
        "email": "hassan@example.com",
        "phone": "03005555555",
        "modes": ["In-person", "Online"],
        "education": ["MBBS", "MD Psychiatry", "Diploma in Addiction Medicine"],
        "prior_roles": ["15 years at Jinnah Hospital", "5 years private practice"],
        "specialties": ["Addiction Medicine", "Substance Abuse", "Family Therapy"],
        "about": "Senior psychiatrist specializing in addiction and family therapy",
        "fee_amount": 6000,
        "fee_currency": "PKR",
    },
]


@pytest.fixture
def sample_docs():
    return [to_document(TherapistCreate(**t)) for t in SAMPLE_THERAPISTS]


@pytest_asyncio.fixture
async def async_client():
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


@pytest_asyncio.fixture
async def seeded_client(async_client: AsyncClient, sample_docs):
    await app.state.store.replace_all(sample_docs)
    return async_client
