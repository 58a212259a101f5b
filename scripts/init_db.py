from flask import current_app

from extensions import db
from models.client import Client


def run():
    db.create_all()
    current_app.logger.info("Table '%s' ready", Client.__tablename__)
