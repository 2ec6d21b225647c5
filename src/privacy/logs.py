#-------------------------------------------------------------------------bh-
# Common Imports:
from .base import *
#-------------------------------------------------------------------------eh-


#-------------------------------------------------------------------------bm-
#----------------------------------------------------------------------------
class LogVisit(Base, SiteScopedMixin, CustomVariableMixin, LogTableMixin):
    """One row per visit (user session)."""
    __tablename__ = 'log_visit'
    __time_column__ = 'visit_last_action_time'

    __table_args__ = (
        Index('index_idsite_datetime', 'idsite', 'visit_last_action_time'),
    )

    idvisit = Column(BigInteger().with_variant(Integer, 'sqlite'), primary_key=True, autoincrement=True)

    visit_first_action_time = Column(DateTime, nullable=False)
    visit_last_action_time = Column(DateTime, nullable=False)
    visit_total_actions = Column(Integer, nullable=True)

    # Location
    location_ip = Column(LargeBinary(16), nullable=False, default=b'\x00\x00\x00\x00')
    location_country = Column(String(3), nullable=False, default='xx')
    location_region = Column(String(3), nullable=True)
    location_city = Column(String(255), nullable=True)
    location_latitude = Column(Float, nullable=True)
    location_longitude = Column(Float, nullable=True)
    location_browser_lang = Column(String(20), nullable=True)

    # Device configuration
    config_browser_name = Column(String(40), nullable=True)
    config_os = Column(String(3), nullable=True)
    config_resolution = Column(String(18), nullable=True)

    # Referrer
    referer_url = Column(Text, nullable=True)
    referer_keyword = Column(String(255), nullable=True)

    user_id = Column(String(200), nullable=True)

    def __str__(self):
        return f"visit {self.idvisit} (site {self.idsite})"

    def __repr__(self):
        return (f"<LogVisit(idvisit={self.idvisit}, idsite={self.idsite}, "
                f"last_action='{self.visit_last_action_time}')>")


#----------------------------------------------------------------------------
class LogLinkVisitAction(Base, SiteScopedMixin, CustomVariableMixin, LogTableMixin):
    """One row per tracked page view or event within a visit."""
    __tablename__ = 'log_link_visit_action'
    __time_column__ = 'server_time'

    __table_args__ = (
        Index('index_idvisit', 'idvisit'),
        Index('index_idsite_servertime', 'idsite', 'server_time'),
    )

    idlink_va = Column(BigInteger().with_variant(Integer, 'sqlite'), primary_key=True, autoincrement=True)
    idvisit = Column(BigInteger, nullable=False)
    server_time = Column(DateTime, nullable=False)

    idaction_url = Column(Integer, nullable=True)
    idaction_name = Column(Integer, nullable=True)
    time_spent_ref_action = Column(Integer, nullable=True)
    pageview_position = Column(SmallInteger, nullable=True)
    custom_float = Column(Float, nullable=True)

    def __str__(self):
        return f"action {self.idlink_va} (visit {self.idvisit})"

    def __repr__(self):
        return (f"<LogLinkVisitAction(idlink_va={self.idlink_va}, idvisit={self.idvisit}, "
                f"server_time='{self.server_time}')>")
#-------------------------------------------------------------------------em-
