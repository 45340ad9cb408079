from app.application import db
from app.models.orm.base import Base


class Area(Base):
    __tablename__ = "areas"
    id = db.Column(db.UUID, primary_key=True)
    name = db.Column(db.String)
    application = db.Column(db.String, nullable=False)
    geostore = db.Column(db.String)
    geostore_data_api = db.Column(db.String)
    wdpaid = db.Column(db.Integer)
    user_id = db.Column(db.String, nullable=False)
    use = db.Column(db.JSONB, nullable=False, default=dict)
    env = db.Column(db.String, nullable=False, default="production")
    iso = db.Column(db.JSONB, nullable=False, default=dict)
    admin = db.Column(db.JSONB, nullable=False, default=dict)
    datasets = db.Column(db.JSONB, nullable=False, default=list)
    tags = db.Column(db.ARRAY(db.String), nullable=False, default=list)
    status = db.Column(db.String, nullable=False, default="pending")
    public = db.Column(db.Boolean, nullable=False, default=False)
    webhook_url = db.Column(db.String)
    email = db.Column(db.String)
    subscription_id = db.Column(db.String)
    language = db.Column(db.String, nullable=False, default="en")
    template_id = db.Column(db.String)
    image = db.Column(db.String)

    _areas_user_id_idx = db.Index(
        "areas_user_id_idx", "user_id", postgresql_using="btree"
    )
    _areas_geostore_idx = db.Index(
        "areas_geostore_idx", "geostore", postgresql_using="hash"
    )
    _areas_geostore_data_api_idx = db.Index(
        "areas_geostore_data_api_idx", "geostore_data_api", postgresql_using="hash"
    )
