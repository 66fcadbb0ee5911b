from flask import jsonify

from comicshare.auth_gate import current_user
from comicshare.blueprints.users import users_bp
from comicshare.services.subscription_service import SubscriptionService


subscription_service = SubscriptionService()


@users_bp.route("/api/users/<user_id>", methods=["GET"])
def user_profile(user_id):
    return jsonify(subscription_service.profile(user_id, current_user().id)), 200


@users_bp.route("/api/users/<user_id>/subscribe", methods=["POST"])
def toggle_subscription(user_id):
    subscribed = subscription_service.toggle(current_user(), user_id)
    return jsonify({"subscribed": subscribed}), 200


@users_bp.route("/api/users/<user_id>/subscribe", methods=["GET"])
def subscription_state(user_id):
    subscribed = subscription_service.is_subscribed(current_user(), user_id)
    return jsonify({"subscribed": subscribed}), 200


@users_bp.route("/api/users/<user_id>/subscribers", methods=["GET"])
def subscribers(user_id):
    return jsonify(subscription_service.subscribers(user_id, current_user().id)), 200


@users_bp.route("/api/users/<user_id>/subscriptions", methods=["GET"])
def subscriptions(user_id):
    return jsonify(subscription_service.subscriptions(user_id, current_user().id)), 200
