from sqlalchemy import create_engine

from core.health_server import create_health_app


def test_root_says_alive():
    client = create_health_app().test_client()
    response = client.get('/')
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Giveaway Bot is alive!"


def test_health_with_database(engine):
    response = create_health_app(engine).test_client().get('/health')
    assert response.status_code == 200
    assert response.get_json() == {"status": "healthy"}


def test_health_reports_unreachable_database(tmp_path):
    broken = create_engine(f"sqlite:///{tmp_path / 'missing' / 'nowhere.db'}")
    response = create_health_app(broken).test_client().get('/health')
    assert response.status_code == 503
    assert response.get_json()['status'] == "unhealthy"
    broken.dispose()
