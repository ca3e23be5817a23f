from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_countdown
from ..common.validators import as_flag, require_gender_filter
from ..core.enums import TimerPhase
from ..core.exceptions import ValidationError
from ..container import Container
from .model import FilterCriteria


def register(app: Flask, container: Container) -> None:
    engine = container.presentation_engine

    def _payload() -> dict:
        data = request.get_json(silent=True)
        if data is None:
            data = request.form.to_dict()
        if not isinstance(data, dict):
            raise ValidationError("request body must be a JSON object")
        return data

    def _criteria_from(data: dict) -> FilterCriteria:
        current = engine.criteria
        return FilterCriteria(
            gender=require_gender_filter(data.get("gender", current.gender.value)),
            only_students=as_flag(data.get("only_students", current.only_students)),
            only_connectivity=as_flag(data.get("only_connectivity", current.only_connectivity)),
        )

    def _state() -> dict:
        snap = engine.snapshot()
        state = snap.to_dict()
        if snap.timer.phase == TimerPhase.EXPIRED:
            state["countdown_label"] = "Time's Up!"
        else:
            state["countdown_label"] = format_countdown(snap.timer.remaining)
        state["duration_label"] = format_countdown(snap.duration_seconds)
        state["estimated_total_label"] = format_countdown(snap.estimated_total_seconds)
        return state

    def _result(ok: bool):
        return jsonify({"ok": bool(ok), "state": _state()})

    def _invalid(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.route("/presentations/state", methods=["GET"], endpoint="presentation_state")
    def presentation_state():
        state = _state()
        drain = getattr(container.audio_device, "drain", None)
        state["cues"] = drain() if drain else []
        return jsonify(state)

    @app.route("/presentations/filter", methods=["POST"], endpoint="presentation_filter")
    def presentation_filter():
        try:
            return _result(engine.set_filter(_criteria_from(_payload())))
        except ValidationError as e:
            return _invalid(e)

    @app.route("/presentations/queue", methods=["POST"], endpoint="presentation_generate")
    def presentation_generate():
        try:
            data = _payload()
            duration = data.get("duration_seconds", engine.duration_seconds)
            return _result(engine.generate_queue(duration, criteria=_criteria_from(data)))
        except ValidationError as e:
            return _invalid(e)

    @app.route("/presentations/duration", methods=["POST"], endpoint="presentation_duration")
    def presentation_duration():
        try:
            data = _payload()
            if "duration_seconds" in data:
                return _result(engine.set_duration(data["duration_seconds"]))
            return _result(engine.adjust_duration(data.get("delta_seconds", 0)))
        except ValidationError as e:
            return _invalid(e)

    @app.route("/presentations/start", methods=["POST"], endpoint="presentation_start")
    def presentation_start():
        return _result(engine.start_or_resume())

    @app.route("/presentations/pause", methods=["POST"], endpoint="presentation_pause")
    def presentation_pause():
        return _result(engine.pause())

    @app.route("/presentations/presented", methods=["POST"], endpoint="presentation_presented")
    def presentation_presented():
        return _result(engine.mark_presented())

    @app.route("/presentations/skip", methods=["POST"], endpoint="presentation_skip")
    def presentation_skip():
        return _result(engine.skip_one())

    @app.route("/presentations/reset", methods=["POST"], endpoint="presentation_reset")
    def presentation_reset():
        return _result(engine.reset_all())
