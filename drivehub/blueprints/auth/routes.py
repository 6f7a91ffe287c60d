from flask import current_app, jsonify
from flask_login import login_required, login_user, logout_user

from . import bp
from .forms import LoginForm
from ...models.user import User
from ...services.projections import user_to_dict
from ...services import messages
from ...services.result import Failure
from ...utils.http import form_failures, reject


@bp.post("/login")
def login():
    form = LoginForm()
    if not form.validate_on_submit():
        return reject(form_failures(form))
    user = User.query.filter_by(email=form.email.data).first()
    if user is None or not user.check_password(form.password.data):
        current_app.logger.info("Login failed for %s", form.email.data)
        return jsonify({"errors": [Failure.main(messages.INVALID_CREDENTIALS).to_dict()], "warnings": []}), 401
    if not user.is_active:
        return jsonify({"errors": [Failure.main(messages.USER_INACTIVE).to_dict()], "warnings": []}), 403
    login_user(user)
    return jsonify({"data": user_to_dict(user), "warnings": []})


@bp.post("/logout")
@login_required
def logout():
    logout_user()
    return jsonify({"data": None, "warnings": []})
