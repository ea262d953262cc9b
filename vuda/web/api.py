from __future__ import annotations

import random
from typing import Optional
from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from ..agents.gateway import AIGateway
from ..config.settings import Settings
from ..dashboard.service import DashboardService
from ..feed.generator import IncidentGenerator
from ..feed.simulator import FeedSimulator
from ..feed.store import IncidentStore
from ..map.cameras import MAP_CENTER, match_cameras
from ..monitoring.handoff import IncidentInbox, UploadService
from ..monitoring.live import LIVE_VIDEO_URL, LiveLogStream
from ..monitoring.videos import MonitoringService
from ..shared.errors import DashboardError, ValidationError
from ..shared.media import read_video_upload
from ..shared.toasts import Toast
from .pages import dashboard_html, live_html, monitoring_html


class ChatIn(BaseModel):
    question: str


class DispatchIn(BaseModel):
    department: str = "Police"


class UploadDispatchIn(BaseModel):
    incident_id: str
    department: str = "Police"


def _not_found(kind: str, item_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Unknown {kind}: {item_id}")


def build_app(
    cfg: Settings,
    gateway: Optional[AIGateway] = None,
    rng: Optional[random.Random] = None,
    live: Optional[LiveLogStream] = None,
) -> FastAPI:
    app = FastAPI(title="VUDA Public Safety")
    rng = rng or random.Random()
    gateway = gateway or AIGateway.from_settings(cfg)

    generator = IncidentGenerator(rng=rng)
    store = IncidentStore(generator, batch_size=cfg.initial_incidents)
    store.refresh()
    inbox = IncidentInbox()
    dashboard = DashboardService(store, gateway, inbox=inbox)
    feed = FeedSimulator(
        store,
        generator,
        min_interval_s=cfg.feed_min_interval_s,
        max_interval_s=cfg.feed_max_interval_s,
        rng=rng,
    )
    monitoring = MonitoringService(gateway.classifier, gateway.chat)
    uploads = UploadService(gateway.classifier, inbox, rng=rng)
    live = live or LiveLogStream()

    app.state.store = store
    app.state.feed = feed
    app.state.dashboard = dashboard
    app.state.monitoring = monitoring
    app.state.live = live

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/meta")
    def meta():
        return {
            "vertex": {
                "region": cfg.gcp_region,
                "video_model": cfg.gemini_video_model,
                "chat_model": cfg.gemini_chat_model,
                "summary_model": cfg.gemini_summary_model,
            },
            "ai_configured": cfg.ai_configured,
            "maps_configured": cfg.maps_configured,
            "missing": list(cfg.missing),
            "max_upload_bytes": cfg.max_upload_bytes,
        }

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def home():
        return dashboard_html(cfg.google_maps_api_key, MAP_CENTER)

    @app.get("/monitoring", response_class=HTMLResponse, include_in_schema=False)
    def monitoring_page():
        return monitoring_html()

    @app.get("/live", response_class=HTMLResponse, include_in_schema=False)
    def live_page():
        return live_html(LIVE_VIDEO_URL)

    @app.get("/incidents")
    def incidents():
        items = dashboard.incidents()
        return {
            "incidents": [i.to_json() for i in items],
            "activeCount": store.count_active(),
            "newIds": sorted(store.newly_added()),
        }

    @app.post("/incidents/refresh")
    def refresh():
        toast = dashboard.refresh()
        return {"ok": True, "count": len(store), "toast": toast.to_json()}

    @app.get("/kpi")
    def kpi():
        dashboard.sync()
        return dashboard.kpi()

    @app.get("/map/markers")
    def markers():
        dashboard.sync()
        found = match_cameras(store.snapshot(), newly_added=store.newly_added())
        return {"center": MAP_CENTER, "markers": [m.to_json() for m in found]}

    @app.post("/incidents/{incident_id}/report")
    def report(incident_id: str):
        out = dashboard.view_report(incident_id)
        if out is None:
            raise _not_found("incident", incident_id)
        return out.to_json()

    @app.post("/incidents/{incident_id}/chat")
    def incident_chat(incident_id: str, inp: ChatIn):
        out = dashboard.chat(incident_id, inp.question)
        if out is None or out.incident is None:
            raise _not_found("incident", incident_id)
        return out.to_json()

    @app.post("/incidents/{incident_id}/dispatch")
    def dispatch(incident_id: str, inp: DispatchIn):
        out = dashboard.dispatch(incident_id, inp.department)
        if out is None:
            raise _not_found("incident", incident_id)
        return out.to_json()

    @app.get("/videos")
    def videos():
        return {"videos": [v.to_json() for v in monitoring.list()]}

    @app.post("/videos")
    async def add_video(file: UploadFile = File(...)):
        upload = await read_video_upload(file, cfg.max_upload_bytes)
        feed_item = monitoring.add(upload)
        # Classification blocks on the model; keep it off the event loop.
        analyzed, toast = await run_in_threadpool(monitoring.analyze, feed_item.id)
        return {"video": analyzed.to_json(), "toast": toast.to_json()}

    @app.post("/videos/{video_id}/chat")
    def video_chat(video_id: str, inp: ChatIn):
        out = monitoring.chat(video_id, inp.question)
        if out is None:
            raise _not_found("video", video_id)
        video, toast = out
        return {"video": video.to_json(), "toast": toast.to_json() if toast else None}

    @app.post("/upload/analyze")
    async def upload_analyze(file: UploadFile = File(...)):
        upload = await read_video_upload(file, cfg.max_upload_bytes)
        try:
            report_out, incident, toast = await run_in_threadpool(uploads.analyze, upload)
        except ValidationError:
            raise
        except DashboardError as e:
            msg = str(e) or "An unexpected error occurred during analysis."
            print(f"[monitoring] upload analysis failed: {msg}")
            return {
                "ok": False,
                "error": msg,
                "toast": Toast(title="Analysis Failed", description=msg, variant="destructive").to_json(),
            }
        return {
            "ok": True,
            "report": report_out.model_dump(by_alias=True),
            "incident": incident.to_json(),
            "toast": toast.to_json(),
        }

    @app.post("/upload/dispatch")
    def upload_dispatch(inp: UploadDispatchIn):
        incident = uploads.dispatch(inp.incident_id, inp.department)
        if incident is None:
            out = dashboard.dispatch(inp.incident_id, inp.department)
            if out is None:
                raise _not_found("incident", inp.incident_id)
            incident = out.incident
        toast = Toast(
            title=f"{inp.department} Dispatched",
            description=f"Alert sent to {inp.department} department for incident: {incident.title}",
        )
        return {"incident": incident.to_json(), "toast": toast.to_json()}

    @app.get("/feed/status")
    def feed_status():
        return {"running": feed.running}

    @app.post("/feed/start")
    def feed_start():
        feed.start()
        return {"ok": True, "running": feed.running}

    @app.post("/feed/stop")
    def feed_stop():
        feed.stop()
        return {"ok": True, "running": feed.running}

    @app.post("/live/start")
    def live_start():
        live.start()
        return {"ok": True, "running": live.running}

    @app.post("/live/stop")
    def live_stop():
        live.stop()
        return {"ok": True, "running": live.running}

    @app.get("/live/logs")
    def live_logs():
        return {"logs": live.logs(), "running": live.running, "finished": live.finished}

    return app
