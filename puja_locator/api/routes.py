"""REST API blueprint."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, Request, current_app, jsonify, request
from rq.exceptions import NoSuchJobError
from rq.job import Job

from ..utils import first_forwarded_ip

api_bp = Blueprint("api", __name__)

LOCAL_FALLBACK_IP = "127.0.0.1"


@api_bp.get("/pujas")
def list_pujas():
    """List pujas with venues ranked by distance from the visitor."""

    address = client_ip(request)
    result = _pipeline().run(
        client_ip=address,
        latitude=request.args.get("lat"),
        longitude=request.args.get("lng"),
        location=request.args.get("location") or None,
    )
    current_app.logger.info("Served %d pujas to %s", len(result.pujas), address)
    return jsonify(result.as_dict()), 200


@api_bp.post("/feed/refresh")
def refresh_feed():
    """Queue a background refresh of the cached spreadsheet."""

    created_at = datetime.now(timezone.utc).isoformat()
    job = _queue().enqueue(
        "puja_locator.tasks.refresh_feed",
        meta={"created_at": created_at},
    )
    response = {
        "job_id": job.id,
        "status": job.get_status(refresh=False),
        "created_at": created_at,
    }
    return jsonify(response), 202


@api_bp.get("/feed/refresh/<job_id>")
def refresh_status(job_id: str):
    """Report on a queued feed refresh; a failed job answers 500 with its error."""

    try:
        job = Job.fetch(job_id, connection=_connection())
    except NoSuchJobError:
        return jsonify({"error": "Job not found"}), 404

    payload: dict[str, object] = {
        "job_id": job.id,
        "status": job.get_status(refresh=True),
        "created_at": job.meta.get("created_at"),
    }

    if job.is_finished:
        payload["result"] = job.result or {}
        return jsonify(payload), 200
    if job.is_failed:
        payload["error"] = job.meta.get("error", job.exc_info)
        return jsonify(payload), 500

    payload["progress"] = job.meta.get("progress", 0)
    return jsonify(payload), 200


def client_ip(req: Request) -> str:
    """Best guess at the visitor's address behind proxies."""

    forwarded = first_forwarded_ip(req.headers.get("X-Forwarded-For"))
    if forwarded:
        return forwarded
    real_ip = (req.headers.get("X-Real-IP") or "").strip()
    if real_ip:
        return real_ip
    return req.remote_addr or LOCAL_FALLBACK_IP


def _pipeline():
    return current_app.extensions["puja_locator"]["pipeline"]


def _queue():
    return current_app.extensions["rq"]["queue"]


def _connection():
    return current_app.extensions["rq"]["connection"]
