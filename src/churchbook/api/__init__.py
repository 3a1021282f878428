"""Flask JSON API for churchbook."""

from typing import Optional

from flask import Flask

from churchbook.api.errors import register_error_handlers
from churchbook.api.helpers import ServiceRegistry
from churchbook.config import Settings
from churchbook.database.base import Database
from churchbook.database.factories import create_database
from churchbook.domain import (
    AccountService,
    ExpenditureService,
    MemberService,
    MembersGroupService,
    ReceiptService,
    TransactionService,
    TransferService,
    UserService,
)

API_PREFIX = "/api/v1"


def build_services(db: Database, bcrypt_rounds: int) -> ServiceRegistry:
    """Bind one instance of every domain service to the gateway."""
    return ServiceRegistry(
        accounts=AccountService(db),
        members=MemberService(db),
        groups=MembersGroupService(db),
        transactions=TransactionService(db),
        receipts=ReceiptService(db),
        expenditures=ExpenditureService(db),
        transfers=TransferService(db),
        users=UserService(db, bcrypt_rounds=bcrypt_rounds),
    )


def create_app(settings: Optional[Settings] = None, db: Optional[Database] = None) -> Flask:
    """Create the Flask application.

    Args:
        settings: Runtime settings; read from the environment when None
        db: Gateway to use; built from settings.database_url when None

    Returns:
        Configured Flask app
    """
    if settings is None:
        settings = Settings.from_env()
    if db is None:
        db = create_database(settings.database_url)
        db.connect()
        db.initialize_schema()

    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions["churchbook"] = build_services(db, settings.bcrypt_rounds)
    app.extensions["churchbook_db"] = db

    # Register blueprints
    from churchbook.api.routes.system import system_bp
    from churchbook.api.routes.accounts import accounts_bp
    from churchbook.api.routes.members import members_bp
    from churchbook.api.routes.groups import groups_bp
    from churchbook.api.routes.transactions import transactions_bp
    from churchbook.api.routes.receipts import receipts_bp
    from churchbook.api.routes.expenditures import expenditures_bp
    from churchbook.api.routes.transfers import transfers_bp
    from churchbook.api.routes.users import users_bp

    app.register_blueprint(system_bp)
    for blueprint in (
        accounts_bp,
        members_bp,
        groups_bp,
        transactions_bp,
        receipts_bp,
        expenditures_bp,
        transfers_bp,
        users_bp,
    ):
        app.register_blueprint(blueprint, url_prefix=f"{API_PREFIX}/{blueprint.name}")

    register_error_handlers(app)
    return app


__all__ = ["create_app", "build_services", "API_PREFIX"]
