"""Design request routes - dashboard, history and lifecycle actions."""
import io

from flask import Blueprint, jsonify, redirect, request, send_file
from flask_babel import gettext as _

from design_tracker.models.design_request import CONTENT_FIELDS
from design_tracker.routes.auth import current_actor, login_required
from design_tracker.services import lifecycle, store, views
from design_tracker.services.blobs import Upload, blob_kind, decode_blob, is_blob, suggest_filename
from design_tracker.services.errors import NotFound, ValidationError

requests_bp = Blueprint('requests', __name__, url_prefix='/requests')

FILE_SLOTS = ('reference', 'result')


def _form_data():
    return request.get_json(silent=True) or request.form


def _upload(field):
    """Read an uploaded file into an Upload, or None if nothing was sent."""
    file = request.files.get(field)
    if not file or not file.filename:
        return None
    return Upload(filename=file.filename, data=file.read())


def _detail(req):
    data = req.to_dict()
    data['reference_kind'] = blob_kind(req.reference_url) if req.reference_url else None
    data['result_kind'] = blob_kind(req.result_file_url) if req.result_file_url else None
    return data


def _date_arg(name):
    try:
        return views.parse_date(request.args.get(name))
    except ValueError:
        raise ValidationError(_('Invalid date for %(name)s.', name=name))


# ========================================
# LISTINGS
# ========================================

@requests_bp.route('', methods=['GET'])
@login_required
def dashboard():
    actor = current_actor()
    result = views.dashboard_view(
        store.list_requests(), actor,
        query=request.args.get('q'),
        status=request.args.get('status'),
        designer=request.args.get('designer'),
    )
    return jsonify(requests=[r.to_dict(include_files=False) for r in result])


@requests_bp.route('/history')
@login_required
def history():
    actor = current_actor()
    result = views.history_view(
        store.list_requests(), actor,
        start=_date_arg('start'),
        end=_date_arg('end'),
        query=request.args.get('q'),
    )
    return jsonify(requests=[r.to_dict(include_files=False) for r in result])


@requests_bp.route('/designers')
@login_required
def designers():
    return jsonify(designers=views.designer_roster(store.list_requests()))


@requests_bp.route('/stats')
@login_required
def stats():
    return jsonify(stats=views.status_counts(store.list_requests(), current_actor()))


# ========================================
# CREATE / EDIT / DELETE
# ========================================

@requests_bp.route('', methods=['POST'])
@login_required
def create():
    data = _form_data()
    fields = {key: data.get(key) for key in CONTENT_FIELDS if key in data}
    req = lifecycle.create_request(current_actor(), fields, reference_upload=_upload('reference_file'))
    return jsonify(request=_detail(req)), 201


@requests_bp.route('/<req_id>', methods=['GET'])
@login_required
def view_request(req_id):
    req = lifecycle.get_request(req_id, current_actor())
    return jsonify(request=_detail(req))


@requests_bp.route('/<req_id>/edit', methods=['POST', 'PUT'])
@login_required
def edit(req_id):
    data = _form_data()
    fields = {key: data.get(key) for key in CONTENT_FIELDS if key in data}
    req = lifecycle.edit_content(req_id, current_actor(), fields, reference_upload=_upload('reference_file'))
    return jsonify(request=_detail(req))


@requests_bp.route('/<req_id>', methods=['DELETE'])
@login_required
def delete(req_id):
    lifecycle.delete_request(req_id, current_actor())
    return jsonify(message=_('Request deleted.'))


# ========================================
# LIFECYCLE ACTIONS
# ========================================

@requests_bp.route('/<req_id>/claim', methods=['POST'])
@login_required
def claim(req_id):
    req = lifecycle.claim(req_id, current_actor())
    return jsonify(request=_detail(req))


@requests_bp.route('/<req_id>/result', methods=['POST'])
@login_required
def submit_result(req_id):
    data = _form_data()
    req = lifecycle.submit_result(
        req_id, current_actor(),
        link=data.get('link'),
        upload=_upload('file'),
    )
    return jsonify(request=_detail(req))


@requests_bp.route('/<req_id>/status', methods=['POST'])
@login_required
def override_status(req_id):
    data = _form_data()
    req = lifecycle.admin_override_status(req_id, current_actor(), data.get('status'))
    return jsonify(request=_detail(req))


# ========================================
# FILES
# ========================================

@requests_bp.route('/<req_id>/files/<slot>')
@login_required
def open_file(req_id, slot):
    """Download an embedded file, or follow an external link."""
    if slot not in FILE_SLOTS:
        raise NotFound(_('Unknown file.'))
    req = lifecycle.get_request(req_id, current_actor())

    if slot == 'reference':
        ref, stored_name = req.reference_url, None
    else:
        ref, stored_name = req.result_file_url, req.result_file_name
    if not ref:
        raise NotFound(_('No file attached.'))

    if not is_blob(ref):
        return redirect(ref)

    mime_type, data = decode_blob(ref)
    return send_file(
        io.BytesIO(data),
        mimetype=mime_type,
        as_attachment=True,
        download_name=suggest_filename(ref, label=slot, stored_name=stored_name),
    )
