"""
Create a customer account without the HTTP API. Run from project root:
  python -m emilyloja.scripts.create_user NOME EMAIL SENHA
Example:
  python -m emilyloja.scripts.create_user "Ana" ana@example.com secret1
"""
import argparse
import sys

from dotenv import load_dotenv

from emilyloja.core.config import get_settings
from emilyloja.core.database import Database
from emilyloja.core.errors import LojaError
from emilyloja.core.logging_config import configure_logging
from emilyloja.services.credentials import register


def main(argv: list[str] | None = None, database: Database | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an EmilyLoja user.")
    parser.add_argument("nome", help="Display name")
    parser.add_argument("email", help="E-mail (stored lowercase)")
    parser.add_argument("senha", help="Password")
    args = parser.parse_args(argv)

    if database is None:
        load_dotenv()
        settings = get_settings()
        configure_logging(settings.LOG_LEVEL)
        database = Database.from_settings(settings)
        database.create_schema()

    db = database.SessionLocal()
    try:
        user = register(db, args.nome, args.email, args.senha)
    except LojaError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user id={user.id} <{user.email}>.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
