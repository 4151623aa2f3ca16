"""DesignRequest model."""
from datetime import datetime
from design_tracker.extensions import db

STATUS_PENDING = 'Pending'
STATUS_IN_PROGRESS = 'In Progress'
STATUS_DONE = 'Done'

VALID_STATUSES = [STATUS_PENDING, STATUS_IN_PROGRESS, STATUS_DONE]

DESIGN_TYPES = ['Social Media', 'Banner', 'Menu', 'Packaging', 'Flyer', 'Other']

# Fields a requester may set at creation and change while the request is pending
CONTENT_FIELDS = ('outlet_name', 'design_type', 'dimensions', 'elements', 'reference_url')
REQUIRED_FIELDS = ('outlet_name', 'design_type', 'dimensions')

EXTERNAL_LINK_NAME = 'External Link'


class DesignRequest(db.Model):
    __tablename__ = 'design_requests'

    id = db.Column(db.String(40), primary_key=True)  # e.g. 'req_3f9c2a...'
    outlet_name = db.Column(db.String(200), nullable=False)
    design_type = db.Column(db.String(40), nullable=False)
    dimensions = db.Column(db.String(100))
    elements = db.Column(db.Text)
    reference_url = db.Column(db.Text)  # External link or data blob

    status = db.Column(db.String(20), nullable=False, default=STATUS_PENDING)  # Pending, In Progress, Done
    designer_name = db.Column(db.String(100))  # Set by claim
    result_file_name = db.Column(db.String(255))
    result_file_url = db.Column(db.Text)  # External link or data blob, set when Done

    requestor_username = db.Column(db.String(80), index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self, include_files=True):
        data = {
            'id': self.id,
            'outlet_name': self.outlet_name,
            'design_type': self.design_type,
            'dimensions': self.dimensions,
            'elements': self.elements,
            'status': self.status,
            'designer_name': self.designer_name,
            'result_file_name': self.result_file_name,
            'requestor_username': self.requestor_username,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
        if include_files:
            data['reference_url'] = self.reference_url
            data['result_file_url'] = self.result_file_url
        return data

    def __repr__(self):
        return f'<DesignRequest {self.id} {self.status}>'
