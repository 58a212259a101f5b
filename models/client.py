# models/client.py
from extensions import db


class Client(db.Model):
    __tablename__ = "clients"

    # Column names kept as the lead providers send them (leadId, offerID)
    lead_id = db.Column("leadId", db.Integer, primary_key=True, autoincrement=True)
    title = db.Column(db.String(50), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    surname = db.Column(db.String(255), nullable=False)
    # UNIQUE makes the duplicate check atomic at insert time
    phone_number = db.Column(db.String(20), nullable=False, unique=True, index=True)
    id_number = db.Column(db.String(13), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    notes = db.Column(db.Text)
    optindate = db.Column(db.Date)
    preferred_time = db.Column(db.Time)
    offer_id = db.Column("offerID", db.String(255))

    def __repr__(self) -> str:
        return f"<Client leadId={self.lead_id} phone_number={self.phone_number}>"
