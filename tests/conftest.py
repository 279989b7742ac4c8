"""Shared pytest fixtures: in-memory database, API client and payload builders."""
import os
import sys
from pathlib import Path

# must be set before db.py is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("AUTO_CREATE_TABLES", "true")

BASE_DIR = Path(__file__).resolve().parent.parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

import pytest
from fastapi.testclient import TestClient

import db
from db import Base, SessionLocal, init_db


@pytest.fixture(autouse=True)
def fresh_tables():
    init_db()
    yield
    Base.metadata.drop_all(bind=db.engine)


@pytest.fixture
def session():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    from main import app

    with TestClient(app) as c:
        yield c


def make_registry_payload(**overrides):
    payload = {
        "strategicObjective": "永續發展ESG政策遵循",
        "subObjective": "資訊安全",
        "responsibleDepartment": "資訊處",
        "riskOwner": "資訊處 王小明",
        "operationalTarget": "全年無重大資安事件",
        "seedMember": "資安課 陳大文",
        "riskCategory": "策略風險",
        "level1Index": "1",
        "riskEventSource": "外部攻擊",
        "level2Index": "1.1",
        "riskScenario": "勒索軟體加密核心系統導致營運中斷",
        "existingMeasures": "EDR、離線備份",
        "unitPossibility": 3,
        "unitImpact": 4,
        "responsiblePossibility": 2,
        "responsibleImpact": 4,
    }
    payload.update(overrides)
    return payload


def make_assessment_payload(risk_registry_id, **overrides):
    payload = {
        "riskRegistryId": risk_registry_id,
        "assessorEmail": "a@b.com",
        "assessorName": "A",
        "assessorDepartment": "IT",
        "currentImpact": 4,
        "currentLikelihood": 4,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def registry_payload():
    return make_registry_payload


@pytest.fixture
def assessment_payload():
    return make_assessment_payload
