"""
Tests for the initial catalog and startup seeding.
"""

from fastapi.testclient import TestClient

from shoeshop.core.config import Settings
from shoeshop.main import create_app
from shoeshop.seed import SEED_SHOES, seed_catalog


def test_seed_creates_catalog(memory_repository):
    assert seed_catalog(memory_repository) == len(SEED_SHOES)

    shoes = memory_repository.list_shoes()
    assert [s.name for s in shoes][0] == "Air Jordan 1"

    stan = next(s for s in shoes if s.name == "Stan Smith")
    assert stan.variations[0].stock_quantity == 30
    assert stan.current_color == "White"


def test_seed_is_skipped_when_catalog_has_data(memory_repository):
    seed_catalog(memory_repository)
    assert seed_catalog(memory_repository) == 0
    assert len(memory_repository.list_shoes()) == len(SEED_SHOES)


def test_app_seeds_on_startup(tmp_path):
    settings = Settings(database_url=f"sqlite:///{tmp_path / 'seed.db'}", seed_data=True, log_level="WARNING")
    app = create_app(settings)
    with TestClient(app) as client:
        body = client.get("/api/v1/shoes", params={"brand": "nike"}).json()

    assert [s["name"] for s in body["shoes"]] == ["Air Jordan 1", "Air Max 90"]
    assert body["shoes"][0]["available_colors"] == ["Red"]
