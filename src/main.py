"""Wires settings, store, service and gateway together for whichever transport hosts the game."""

from src.api.gateway import LudoGateway
from src.core.config import Settings, get_settings
from src.core.log_config import configure_logging
from src.db.database import make_engine, make_session
from src.db.sql_repository import SQLGameRepository
from src.ludo.dice import DiceRoller, roll_die
from src.services.broadcaster import Broadcaster
from src.services.ludo_service import LudoService


def create_gateway(
    broadcaster: Broadcaster,
    settings: Settings | None = None,
    roller: DiceRoller = roll_die,
) -> LudoGateway:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    engine = make_engine(settings.database_url)
    repository = SQLGameRepository(
        make_session(engine),
        expiration_seconds=settings.game_expiration_seconds,
    )
    service = LudoService(repository, broadcaster, roller)
    return LudoGateway(service)
