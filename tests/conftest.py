#-------------------------------------------------------------------------bh-
# pytest configuration and fixtures for raw data anonymization tests
#-------------------------------------------------------------------------eh-

import pytest
import sys
import ipaddress
from datetime import datetime
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root and src to path for imports
PROJ_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJ_ROOT / 'src'))

from privacy import Base, LogLinkVisitAction, LogVisit


def packed(ip: str) -> bytes:
    return ipaddress.ip_address(ip).packed


# Visits seeded by the log_data fixture: (idsite, last action time, ip, location)
SEED_VISITS = [
    (1, datetime(2015, 1, 3, 10, 0, 0), '192.168.100.200', ('de', '16', 'Berlin', 52.52, 13.40)),
    (1, datetime(2015, 1, 4, 8, 30, 0), '2001:db8:85a3:1234:5678::1', ('fr', '75', 'Paris', 48.85, 2.35)),
    (2, datetime(2015, 1, 3, 23, 59, 59), '10.1.2.3', ('us', 'CA', 'San Jose', 37.33, -121.89)),
    (3, datetime(2015, 1, 3, 0, 0, 0), '172.16.5.6', ('nz', 'E7', 'Auckland', -36.85, 174.76)),
    (1, datetime(2015, 1, 2, 23, 59, 59), '203.0.113.9', ('gb', 'H9', 'London', 51.51, -0.13)),
]


@pytest.fixture
def engine():
    """Fresh in-memory record store per test; mutations commit for real."""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def SessionFactory(engine):
    """Create a session factory bound to the test engine."""
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def session(SessionFactory):
    """Provide a session for one test."""
    session = SessionFactory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def log_data(SessionFactory):
    """
    Seed visits and one page action per visit.

    Returns:
        dict: idvisit and idlink_va lists in seeding order
    """
    seed_session = SessionFactory()
    visits = []
    for idsite, last_action, ip, (country, region, city, lat, lon) in SEED_VISITS:
        visits.append(LogVisit(
            idsite=idsite,
            idvisitor=b'\x01' * 8,
            visit_first_action_time=last_action,
            visit_last_action_time=last_action,
            visit_total_actions=1,
            location_ip=packed(ip),
            location_country=country,
            location_region=region,
            location_city=city,
            location_latitude=lat,
            location_longitude=lon,
            location_browser_lang='en-us',
            config_browser_name='FF',
            config_os='LIN',
            config_resolution='1920x1080',
            referer_url='https://search.example.org/?q=private',
            referer_keyword='private',
            user_id='someone@example.org',
            custom_var_k1='plan',
            custom_var_v1='premium',
        ))
    seed_session.add_all(visits)
    seed_session.flush()

    actions = [
        LogLinkVisitAction(
            idsite=visit.idsite,
            idvisitor=visit.idvisitor,
            idvisit=visit.idvisit,
            server_time=visit.visit_last_action_time,
            idaction_url=10 + visit.idvisit,
            idaction_name=20 + visit.idvisit,
            time_spent_ref_action=5,
            pageview_position=1,
            custom_float=1.5,
            custom_var_k1='section',
            custom_var_v1='checkout',
        )
        for visit in visits
    ]
    seed_session.add_all(actions)
    seed_session.commit()

    ids = {
        'visits': [visit.idvisit for visit in visits],
        'actions': [action.idlink_va for action in actions],
    }
    seed_session.close()
    return ids
