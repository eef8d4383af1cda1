from __future__ import annotations

import argparse
import json
import sys

from .api_main import build_services, configure_logging
from .config import Settings
from .db import Database
from .errors import ClinicError
from .security import create_access_token


def _open(settings: Settings) -> Database:
    db = Database(settings.db_url, echo=settings.db_echo)
    db.create_all()  # garantisce tabelle
    return db


def cmd_init(args: argparse.Namespace, settings: Settings) -> int:
    db = _open(settings)
    db.dispose()
    print(f"DB inizializzato: {db.url}")
    return 0


def cmd_token(args: argparse.Namespace, settings: Settings) -> int:
    print(create_access_token(settings, subject=args.subject))
    return 0


def cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    db = _open(settings)
    services = build_services(db, settings)
    service = getattr(services, args.entity)
    try:
        record = service.get_by_id(args.id)
    except ClinicError as e:
        print(str(e), file=sys.stderr)
        return 1
    finally:
        db.dispose()
    print(json.dumps(record.model_dump(), indent=2, ensure_ascii=False))
    return 0


def cmd_appointments_by_dni(args: argparse.Namespace, settings: Settings) -> int:
    db = _open(settings)
    try:
        appointments = build_services(db, settings).appointment.get_by_dni(args.dni)
    except ClinicError as e:
        print(str(e), file=sys.stderr)
        return 1
    finally:
        db.dispose()

    if not appointments:
        print("Nessun turno per questo dni.")
        return 0
    for a in appointments:
        print(f"{a.id} | {a.date} {a.hour} | {a.dentist.last_name} {a.dentist.name} | {a.description}")
    return 0


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    uvicorn.run(
        "dental_clinic.api_main:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="dental_clinic", description="CLI Dental Clinic")
    sub = p.add_subparsers(required=True)

    p_init = sub.add_parser("init", help="Crea le tabelle")
    p_init.set_defaults(func=cmd_init)

    p_token = sub.add_parser("token", help="Genera un token per l'header `token`")
    p_token.add_argument("--subject", required=True, help="Chi usera' il token (operatore, sistema)")
    p_token.set_defaults(func=cmd_token)

    p_show = sub.add_parser("show", help="Mostra un record in JSON")
    p_show.add_argument("entity", choices=["patient", "dentist", "appointment"])
    p_show.add_argument("id", type=int)
    p_show.set_defaults(func=cmd_show)

    p_dni = sub.add_parser("appointments-by-dni", help="Turni di un paziente")
    p_dni.add_argument("dni", type=int)
    p_dni.set_defaults(func=cmd_appointments_by_dni)

    p_serve = sub.add_parser("serve", help="Avvia l'API")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.set_defaults(func=cmd_serve)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings)
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
