"""Flask application exposing the slideout stack to the browser renderer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Flask, flash, jsonify, request

from kenneldesk.querycache.store import QueryCache
from kenneldesk.slideout.controller import SlideoutController
from kenneldesk.slideout.host import SlideoutHost
from kenneldesk.slideout.registry import SlideoutType
from kenneldesk.slideout.stack import PanelState


class ValidationError(RuntimeError):
    """Raised when incoming data fails validation."""


def _plain(value: Any) -> Any:
    """Drop callables so panel props can be sent as JSON."""

    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items() if not callable(item)}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value if not callable(item)]
    return value


def serialize_panel(state: PanelState | None) -> dict[str, Any] | None:
    if state is None:
        return None
    panel_type = state.type.value if isinstance(state.type, SlideoutType) else state.type
    return {
        "type": panel_type,
        "props": _plain(state.props),
        "title": state.title,
        "description": state.description,
        "width": state.width,
    }


def create_app(database_path: str = ":memory:", config: Mapping[str, Any] | None = None) -> Flask:
    """Create and configure the Flask application."""

    app = Flask(__name__)
    app.config["SECRET_KEY"] = "kenneldesk-secret"
    app.config["CACHE_DATABASE"] = database_path
    app.config["TENANT_ID"] = "unknown"
    app.config.from_prefixed_env("KENNELDESK")
    if config:
        app.config.update(config)

    cache = QueryCache(app.config["CACHE_DATABASE"])
    controller = SlideoutController(invalidator=cache.invalidate)
    host = SlideoutHost(
        controller,
        tenant_id=app.config["TENANT_ID"],
        notify=lambda message: flash(message, "success"),
    )
    redirects: list[str] = []
    app.extensions["kenneldesk"] = {"cache": cache, "controller": controller, "host": host}

    def _external_return(href: str):
        def on_back() -> None:
            redirects.append(href)

        return on_back

    def _view_payload() -> dict[str, Any]:
        view = controller.view()
        return {
            "is_open": view["is_open"],
            "depth": controller.depth,
            "current_panel": serialize_panel(view["current_panel"]),
            "has_back_action": view["has_back_action"],
            "has_history": controller.has_history,
            "previous_label": view["previous_label"],
        }

    def _json_body() -> dict[str, Any]:
        payload = request.get_json(silent=True)
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        return payload

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError) -> Any:
        app.logger.warning("Rejected slideout request: %s", exc)
        return jsonify({"error": str(exc)}), 400

    @app.get("/slideout")
    def slideout_view() -> Any:
        return jsonify(_view_payload())

    @app.get("/slideout/render")
    def slideout_render() -> Any:
        return jsonify({"panel": host.render()})

    @app.post("/slideout/open")
    def slideout_open() -> Any:
        payload = _json_body()
        panel_type = payload.get("type")
        if not panel_type or not isinstance(panel_type, str):
            raise ValidationError("Panel type is required")
        props = payload.get("props")
        if props is None:
            props = {}
        if not isinstance(props, dict):
            raise ValidationError("Panel props must be an object")
        return_to = props.get("returnTo")
        if return_to is not None:
            if not isinstance(return_to, dict) or not return_to.get("href"):
                raise ValidationError("returnTo requires an href")
            props["returnTo"] = {**return_to, "onBack": _external_return(return_to["href"])}
        controller.open(panel_type, props)
        return jsonify(_view_payload()), 201

    @app.post("/slideout/back")
    def slideout_back() -> Any:
        redirects.clear()
        controller.go_back()
        body = _view_payload()
        body["redirect"] = redirects.pop() if redirects else None
        return jsonify(body)

    @app.post("/slideout/close")
    def slideout_close() -> Any:
        controller.close()
        return jsonify(_view_payload())

    @app.post("/slideout/success")
    def slideout_success() -> Any:
        payload = _json_body()
        if not controller.is_open:
            raise ValidationError("No slideout is open")
        message = host.on_form_success(payload.get("result"))
        body = _view_payload()
        body["message"] = message
        return jsonify(body)

    @app.get("/cache")
    def cache_entries() -> Any:
        return jsonify({"entries": cache.entries()})

    @app.put("/cache")
    def cache_store() -> Any:
        payload = _json_body()
        key = payload.get("key")
        if not isinstance(key, list) or not key:
            raise ValidationError("Cache key must be a non-empty list")
        return jsonify(cache.set(key, payload.get("data"))), 201

    return app


__all__ = ["ValidationError", "create_app", "serialize_panel"]
