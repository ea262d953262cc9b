from __future__ import annotations
import uvicorn
from ..config.settings import load_settings
from ..web.api import build_app


def main():
    cfg = load_settings(".env")
    if cfg.missing:
        print("[run] configuration missing, related features will report errors:", ", ".join(cfg.missing))

    app = build_app(cfg)
    RUN_FEED = True
    if RUN_FEED:
        app.state.feed.start()

    print(f"[run] Dashboard: http://{cfg.chat_host}:{cfg.chat_port}/")
    print(f"[run] Monitoring: http://{cfg.chat_host}:{cfg.chat_port}/monitoring")
    print(f"[run] Live analysis: http://{cfg.chat_host}:{cfg.chat_port}/live")
    try:
        uvicorn.run(app, host=cfg.chat_host, port=cfg.chat_port, access_log=False)
    finally:
        app.state.feed.stop()
        app.state.live.stop()

if __name__ == "__main__":
    main()
