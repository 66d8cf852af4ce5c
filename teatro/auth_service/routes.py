from flask import Blueprint, g, jsonify

from teatro.api_gateway.auth import get_backend, login_required
from teatro.api_gateway.errors import backend_errors
from teatro.api_gateway.payload import parse_body
from teatro.auth_service import service
from teatro.schemas import ForgotPasswordRequest, LoginRequest, ProfileUpdateRequest, SignupRequest

bp = Blueprint("auth", __name__, url_prefix="/auth")


@bp.route("/signup", methods=["POST"])
@backend_errors("Erro ao criar conta")
def signup():
    """Регистрация пользователя"""
    user = service.signup(get_backend(), parse_body(SignupRequest))
    return jsonify({
        "success": True,
        "message": "Cadastro realizado com sucesso!",
        "user": user.to_dict(),
    }), 201


@bp.route("/login", methods=["POST"])
@backend_errors("Erro ao fazer login")
def login():
    user, session = service.login(get_backend(), parse_body(LoginRequest))
    return jsonify({"user": user.to_dict(), "session": session.to_dict()}), 200


@bp.route("/logout", methods=["POST"])
@backend_errors("Erro ao fazer logout")
@login_required
def logout():
    service.logout(get_backend(), g.token)
    return jsonify({"message": "Logout realizado com sucesso"}), 200


@bp.route("/me", methods=["GET"])
@backend_errors("Erro ao buscar usuário")
@login_required
def me():
    return jsonify({"user": g.user.to_dict()}), 200


@bp.route("/profile", methods=["PUT"])
@backend_errors("Erro ao atualizar perfil")
@login_required
def update_profile():
    user = service.update_profile(g.store, g.user.id, parse_body(ProfileUpdateRequest))
    user = user.model_copy(update={"email": g.user.email})
    return jsonify({"message": "Perfil atualizado", "user": user.to_dict()}), 200


@bp.route("/forgot-password", methods=["POST"])
@backend_errors("Erro ao enviar email de recuperação")
def forgot_password():
    service.forgot_password(get_backend(), parse_body(ForgotPasswordRequest).email)
    return jsonify({"message": "Email de recuperação enviado"}), 200
