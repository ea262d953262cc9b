from __future__ import annotations

import json

_HEAD = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width,initial-scale=1" />
    <title>VUDA • {title}</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <style>
      :root {{ color-scheme: dark; }}
      html, body {{ height: 100%; }}
      .t-12 {{ font-size: 12px; line-height: 18px; }}
      .t-14 {{ font-size: 14px; line-height: 20px; }}
      .t-18 {{ font-size: 18px; line-height: 26px; }}
      .t-26 {{ font-size: 26px; line-height: 34px; }}
      @keyframes pulseRing {{ 0% {{ opacity: 1; }} 50% {{ opacity: .35; }} 100% {{ opacity: 1; }} }}
      .is-new {{ animation: pulseRing 1s ease-in-out infinite; }}
    </style>
  </head>
  <body class="min-h-screen bg-zinc-950 text-zinc-50 antialiased">
    <header class="fixed top-0 inset-x-0 z-20 h-14 border-b border-zinc-800 bg-zinc-950/90 backdrop-blur flex items-center px-6 gap-6">
      <a href="/" class="t-18 font-semibold tracking-tight">VUDA <span class="text-emerald-400">Public Safety</span></a>
      <nav class="t-14 text-zinc-400 flex gap-4">
        <a class="hover:text-zinc-100" href="/">Dashboard</a>
        <a class="hover:text-zinc-100" href="/monitoring">Monitoring</a>
        <a class="hover:text-zinc-100" href="/live">Live Analysis</a>
      </nav>
      <div id="configBanner" class="ml-auto t-12 text-amber-300"></div>
    </header>
    <div id="toasts" class="fixed bottom-4 right-4 z-30 space-y-2 w-80"></div>
"""

_COMMON_JS = r"""
      const TOAST_COLORS = {
        destructive: "border-rose-500/60 bg-rose-950/90",
        accent: "border-amber-500/60 bg-amber-950/90",
        default: "border-zinc-700 bg-zinc-900/95",
      };
      function esc(s) {
        return String(s ?? "").replace(/[&<>"']/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;","'":"&#39;"}[c]));
      }
      function toast(t) {
        if (!t) return;
        const el = document.createElement("div");
        el.className = "rounded-lg border p-3 t-14 shadow-lg " + (TOAST_COLORS[t.variant] || TOAST_COLORS.default);
        el.innerHTML = `<div class="font-semibold">${esc(t.title)}</div><div class="text-zinc-300 t-12">${esc(t.description)}</div>`;
        document.getElementById("toasts").appendChild(el);
        setTimeout(() => el.remove(), 5000);
      }
      async function api(path, opts) {
        const r = await fetch(path, opts);
        let body = null;
        try { body = await r.json(); } catch (e) { body = null; }
        if (!r.ok) {
          const msg = (body && (body.detail || body.error)) || r.statusText;
          toast({title: "Request failed", description: msg, variant: "destructive"});
          throw new Error(msg);
        }
        return body;
      }
      async function postJson(path, payload) {
        return api(path, {method: "POST", headers: {"Content-Type": "application/json"}, body: JSON.stringify(payload || {})});
      }
      async function loadMeta() {
        const meta = await api("/meta");
        if (meta.missing && meta.missing.length) {
          document.getElementById("configBanner").textContent = "Configuration missing: " + meta.missing.join(", ");
        }
        return meta;
      }
"""


def _page(title: str, body: str, script: str) -> str:
    return (
        _HEAD.format(title=title)
        + body
        + "\n    <script>\n"
        + _COMMON_JS
        + script
        + "\n    </script>\n  </body>\n</html>\n"
    )


def dashboard_html(maps_api_key: str, map_center: dict) -> str:
    body = """
    <main class="pt-14">
      <section id="kpis" class="grid gap-4 md:grid-cols-2 lg:grid-cols-4 p-6"></section>
      <section class="grid grid-cols-1 lg:grid-cols-3 gap-6 px-6 pb-6">
        <div class="lg:col-span-2 rounded-xl border border-zinc-800 bg-zinc-900/40 min-h-[480px] relative overflow-hidden">
          <div id="map" class="absolute inset-0"></div>
          <div id="mapFallback" class="absolute inset-0 hidden p-4"></div>
        </div>
        <div class="rounded-xl border border-zinc-800 bg-zinc-900/40 flex flex-col min-h-[480px]">
          <div class="flex items-center justify-between p-4 border-b border-zinc-800">
            <div class="t-18 font-semibold">Live Alerts</div>
            <button id="refreshBtn" class="t-12 rounded-md border border-zinc-700 px-3 py-1 hover:bg-zinc-800">Refresh</button>
          </div>
          <div id="alerts" class="flex-1 overflow-y-auto p-3 space-y-2"></div>
        </div>
      </section>
    </main>

    <div id="modal" class="fixed inset-0 z-40 hidden bg-black/70 flex items-center justify-center p-4">
      <div class="w-full max-w-3xl max-h-[90vh] overflow-y-auto rounded-xl border border-zinc-800 bg-zinc-950 p-6 space-y-4">
        <div class="flex items-start justify-between">
          <div>
            <div id="mTitle" class="t-26 font-semibold"></div>
            <div id="mMeta" class="t-12 text-zinc-400"></div>
          </div>
          <button id="mClose" class="t-14 text-zinc-400 hover:text-zinc-100">Close</button>
        </div>
        <div>
          <div class="t-14 font-semibold text-emerald-300">AI Summary</div>
          <div id="mSummary" class="t-14 text-zinc-200 whitespace-pre-wrap"></div>
        </div>
        <div>
          <div class="t-14 font-semibold">Initial AI System Analysis</div>
          <div id="mAnalysis" class="t-14 text-zinc-300"></div>
        </div>
        <div>
          <div class="t-14 font-semibold">Action Log</div>
          <ul id="mLog" class="t-12 text-zinc-300 space-y-1"></ul>
          <div class="mt-2 flex gap-2">
            <select id="mDept" class="t-12 rounded-md bg-zinc-900 border border-zinc-700 px-2 py-1">
              <option>Police</option><option>Fire &amp; Rescue</option><option>Emergency Medical Services</option>
              <option>Traffic Police</option><option>Disaster Management</option>
            </select>
            <button id="mDispatch" class="t-12 rounded-md bg-rose-600 hover:bg-rose-500 px-3 py-1">Dispatch</button>
          </div>
        </div>
        <div>
          <div class="t-14 font-semibold">Ask the AI</div>
          <div id="mChat" class="t-14 space-y-2 max-h-56 overflow-y-auto my-2"></div>
          <form id="mChatForm" class="flex gap-2">
            <input id="mQuestion" class="flex-1 t-14 rounded-md bg-zinc-900 border border-zinc-700 px-3 py-2" placeholder="Ask about this incident..." />
            <button class="t-14 rounded-md bg-emerald-600 hover:bg-emerald-500 px-4">Send</button>
          </form>
        </div>
      </div>
    </div>
"""
    script = (
        f"      const MAPS_KEY = {json.dumps(maps_api_key)};\n"
        f"      const MAP_CENTER = {json.dumps(map_center)};\n"
        + r"""
      const STATUS_COLORS = {critical: "#f43f5e", warning: "#f59e0b", new: "#38bdf8", idle: "#52525b"};
      let selectedId = null;
      let knownIds = null;
      let gmap = null;
      let gmarkers = {};

      function kpiCard(title, value, subtitle) {
        return `<div class="rounded-xl border border-zinc-800 bg-zinc-900/40 p-4">
          <div class="t-12 text-zinc-400">${esc(title)}</div>
          <div class="t-26 font-semibold">${esc(value)}</div>
          <div class="t-12 text-zinc-500">${esc(subtitle || "")}</div></div>`;
      }

      async function loadKpi() {
        const k = await api("/kpi");
        document.getElementById("kpis").innerHTML =
          kpiCard("Avg. Response Time", k.avgResponseTime, "AI-Assisted Dispatch") +
          kpiCard("False Alarms", k.falseAlarms, "Reduced Inaccuracies") +
          kpiCard("Active Incidents", k.activeIncidents, `${k.criticalIncidents} critical`) +
          kpiCard("System Status", k.systemStatus, "");
      }

      function alertCard(inc) {
        const color = STATUS_COLORS[inc.status.toLowerCase()] || STATUS_COLORS.idle;
        const tags = (inc.anomalyTags || []).map(t => `<span class="t-12 rounded bg-zinc-800 px-1.5">${esc(t.replace(/_/g, " "))}</span>`).join(" ");
        return `<div class="rounded-lg border border-zinc-800 p-3 hover:bg-zinc-900 cursor-pointer" data-id="${esc(inc.id)}">
          <div class="flex items-center justify-between">
            <div class="t-14 font-semibold">${esc(inc.title)}</div>
            <span class="t-12 font-semibold" style="color:${color}">${esc(inc.status)}</span>
          </div>
          <div class="t-12 text-zinc-400">${esc(inc.type)} • ${esc(inc.location)} • ${new Date(inc.timestamp).toLocaleTimeString()}</div>
          <div class="mt-1 flex flex-wrap gap-1">${tags}</div></div>`;
      }

      async function loadIncidents() {
        const data = await api("/incidents");
        const ids = new Set(data.incidents.map(i => i.id));
        if (knownIds) {
          data.incidents.filter(i => !knownIds.has(i.id) && i.status !== "Resolved").forEach(i =>
            toast({title: `New Alert: ${i.title}`, description: i.location, variant: i.status === "Critical" ? "destructive" : "default"}));
        }
        knownIds = ids;
        const box = document.getElementById("alerts");
        box.innerHTML = data.incidents.map(alertCard).join("") || `<div class="t-14 text-zinc-500">No incidents.</div>`;
        box.querySelectorAll("[data-id]").forEach(el => el.onclick = () => openReport(el.dataset.id));
      }

      async function loadMarkers() {
        const data = await api("/map/markers");
        if (gmap) {
          data.markers.forEach(m => {
            const icon = {path: google.maps.SymbolPath.CIRCLE, scale: m.isNew ? 11 : 8, fillColor: STATUS_COLORS[m.state] || STATUS_COLORS.idle, fillOpacity: 0.9, strokeWeight: 1, strokeColor: "#fafafa"};
            if (!gmarkers[m.id]) {
              gmarkers[m.id] = new google.maps.Marker({position: {lat: m.lat, lng: m.lon}, map: gmap, title: m.name});
              gmarkers[m.id].addListener("click", () => { if (gmarkers[m.id].incidentId) openReport(gmarkers[m.id].incidentId); });
            }
            gmarkers[m.id].setIcon(icon);
            gmarkers[m.id].incidentId = m.incidentId;
          });
          return;
        }
        const fb = document.getElementById("mapFallback");
        fb.classList.remove("hidden");
        fb.innerHTML = `<div class="t-12 text-amber-300 mb-2">Map provider not configured: showing camera list.</div>` +
          data.markers.map(m => `<div class="flex items-center gap-2 t-14 py-1 ${m.isNew ? "is-new" : ""}">
            <span class="inline-block w-3 h-3 rounded-full" style="background:${STATUS_COLORS[m.state] || STATUS_COLORS.idle}"></span>
            <span>${esc(m.name)}</span><span class="text-zinc-500 t-12">${esc(m.incidentTitle || "no active incident")}</span></div>`).join("");
      }

      function initMap() {
        gmap = new google.maps.Map(document.getElementById("map"), {center: MAP_CENTER, zoom: 12, disableDefaultUI: true});
        loadMarkers();
      }

      function renderReport(inc, loading) {
        document.getElementById("mTitle").textContent = inc.title;
        document.getElementById("mMeta").textContent = `${inc.type} • ${inc.location} • ${new Date(inc.timestamp).toLocaleString()} • ${inc.status}`;
        document.getElementById("mSummary").textContent = inc.generatedSummary || (loading ? "Generating AI summary..." : "No AI summary available.");
        document.getElementById("mAnalysis").textContent = inc.initialAISystemAnalysis || "";
        document.getElementById("mLog").innerHTML = (inc.actionLog || []).map(a =>
          `<li><span class="text-zinc-500">${esc(a.timestamp)}</span> ${esc(a.description)}${a.assignedToDepartment ? ` <span class="text-emerald-300">[${esc(a.assignedToDepartment)}]</span>` : ""}</li>`).join("");
        document.getElementById("mChat").innerHTML = (inc.chatHistory || []).map(m =>
          `<div class="${m.sender === "user" ? "text-right" : ""}"><span class="inline-block rounded-lg px-3 py-1 ${m.sender === "user" ? "bg-emerald-700" : "bg-zinc-800"}">${esc(m.text)}</span></div>`).join("");
      }

      async function openReport(id) {
        selectedId = id;
        document.getElementById("modal").classList.remove("hidden");
        const current = (await api("/incidents")).incidents.find(i => i.id === id);
        if (current) renderReport(current, !current.generatedSummary);
        const out = await postJson(`/incidents/${encodeURIComponent(id)}/report`);
        if (out.incident) renderReport(out.incident, out.loading);
        toast(out.toast);
      }

      document.getElementById("mClose").onclick = () => { selectedId = null; document.getElementById("modal").classList.add("hidden"); };
      document.getElementById("mDispatch").onclick = async () => {
        const out = await postJson(`/incidents/${encodeURIComponent(selectedId)}/dispatch`, {department: document.getElementById("mDept").value});
        renderReport(out.incident, false); toast(out.toast);
      };
      document.getElementById("mChatForm").onsubmit = async (ev) => {
        ev.preventDefault();
        const q = document.getElementById("mQuestion");
        if (!q.value.trim()) return;
        const question = q.value; q.value = "";
        const out = await postJson(`/incidents/${encodeURIComponent(selectedId)}/chat`, {question});
        renderReport(out.incident, false); toast(out.toast);
      };
      document.getElementById("refreshBtn").onclick = async () => {
        const out = await postJson("/incidents/refresh");
        knownIds = null; toast(out.toast); refreshAll();
      };

      function refreshAll() { loadIncidents(); loadKpi(); loadMarkers(); }

      loadMeta();
      if (MAPS_KEY) {
        const s = document.createElement("script");
        s.src = `https://maps.googleapis.com/maps/api/js?key=${encodeURIComponent(MAPS_KEY)}&callback=initMap`;
        s.async = true;
        document.head.appendChild(s);
      }
      refreshAll();
      setInterval(refreshAll, 3000);
"""
    )
    return _page("Dashboard", body, script)


def monitoring_html() -> str:
    body = """
    <main class="pt-14 grid grid-cols-1 lg:grid-cols-3 gap-6 p-6">
      <section class="lg:col-span-2 space-y-6">
        <div class="rounded-xl border border-zinc-800 bg-zinc-900/40 p-4 space-y-3">
          <div class="t-18 font-semibold">Monitor Video Feeds</div>
          <input id="feedFile" type="file" accept="video/*" class="t-14" />
          <div id="selected" class="t-14 text-zinc-300"></div>
          <div id="feedChat" class="t-14 space-y-2 max-h-72 overflow-y-auto"></div>
          <form id="feedChatForm" class="flex gap-2 hidden">
            <input id="feedQuestion" class="flex-1 t-14 rounded-md bg-zinc-900 border border-zinc-700 px-3 py-2" placeholder="Ask about this video..." />
            <button class="t-14 rounded-md bg-emerald-600 hover:bg-emerald-500 px-4">Send</button>
          </form>
        </div>
        <div class="rounded-xl border border-zinc-800 bg-zinc-900/40 p-4 space-y-3">
          <div class="t-18 font-semibold">Upload &amp; Raise Alert</div>
          <input id="uploadFile" type="file" accept="video/*" class="t-14" />
          <button id="uploadBtn" class="t-14 rounded-md bg-emerald-600 hover:bg-emerald-500 px-4 py-1">Analyze Video</button>
          <div id="uploadResult" class="t-14 text-zinc-300 whitespace-pre-wrap"></div>
          <button id="policeBtn" class="hidden t-14 rounded-md bg-rose-600 hover:bg-rose-500 px-4 py-1">Dispatch Police</button>
        </div>
      </section>
      <aside class="rounded-xl border border-zinc-800 bg-zinc-900/40 p-4">
        <div class="t-18 font-semibold mb-2">Feeds</div>
        <div id="feeds" class="space-y-2"></div>
      </aside>
    </main>
"""
    script = r"""
      const STATUS_CLASS = {analyzing: "text-sky-400 animate-pulse", analyzed: "text-emerald-400", error: "text-rose-400", pending: "text-zinc-400"};
      let selectedFeed = null;
      let lastUploadIncident = null;

      function renderFeed(f) {
        selectedFeed = f.id;
        const anomaly = f.analysisResult && f.analysisResult.isSignificant ? f.analysisResult.incidentType.replace(/_/g, " ") : "None detected";
        document.getElementById("selected").innerHTML = `<div><b>${esc(f.filename)}</b></div>
          <div>Status: <span class="${STATUS_CLASS[f.status] || ""}">${esc(f.status)}</span></div>
          <div>Anomalies: ${esc(anomaly)}</div>${f.error ? `<div class="text-rose-400">${esc(f.error)}</div>` : ""}`;
        document.getElementById("feedChat").innerHTML = f.chatHistory.map(m =>
          `<div class="${m.sender === "user" ? "text-right" : ""}"><span class="inline-block rounded-lg px-3 py-1 ${m.sender === "user" ? "bg-emerald-700" : "bg-zinc-800"}">${esc(m.text)}</span></div>`).join("");
        document.getElementById("feedChatForm").classList.remove("hidden");
      }

      async function loadFeeds() {
        const data = await api("/videos");
        const box = document.getElementById("feeds");
        box.innerHTML = data.videos.slice().reverse().map(f => {
          const label = f.status === "analyzed" ? f.analysisResult.incidentType.replace(/_/g, " ") : f.status;
          return `<div class="rounded-lg border border-zinc-800 p-2 cursor-pointer hover:bg-zinc-900" data-id="${esc(f.id)}">
            <div class="t-14">${esc(f.filename)}</div><div class="t-12 ${STATUS_CLASS[f.status] || ""}">${esc(label)}</div></div>`;
        }).join("") || `<div class="t-14 text-zinc-500">No videos yet.</div>`;
        box.querySelectorAll("[data-id]").forEach(el => el.onclick = () => {
          const f = data.videos.find(v => v.id === el.dataset.id); if (f) renderFeed(f);
        });
      }

      document.getElementById("feedFile").onchange = async (ev) => {
        const file = ev.target.files[0]; if (!file) return;
        const fd = new FormData(); fd.append("file", file);
        document.getElementById("selected").textContent = `Analyzing video: ${file.name}`;
        const out = await api("/videos", {method: "POST", body: fd});
        renderFeed(out.video); toast(out.toast); loadFeeds();
        ev.target.value = "";
      };

      document.getElementById("feedChatForm").onsubmit = async (ev) => {
        ev.preventDefault();
        const q = document.getElementById("feedQuestion");
        if (!q.value.trim() || !selectedFeed) return;
        const question = q.value; q.value = "";
        const out = await postJson(`/videos/${encodeURIComponent(selectedFeed)}/chat`, {question});
        renderFeed(out.video); toast(out.toast);
      };

      document.getElementById("uploadBtn").onclick = async () => {
        const file = document.getElementById("uploadFile").files[0];
        if (!file) { toast({title: "No File Selected", description: "Please select a video file to analyze.", variant: "destructive"}); return; }
        const fd = new FormData(); fd.append("file", file);
        document.getElementById("uploadResult").textContent = "Analyzing...";
        const out = await api("/upload/analyze", {method: "POST", body: fd});
        toast(out.toast);
        if (!out.ok) { document.getElementById("uploadResult").textContent = out.error; return; }
        lastUploadIncident = out.incident.id;
        document.getElementById("uploadResult").textContent =
          `Type: ${out.report.incidentType}\nSuggested department: ${out.report.suggestedDepartment}\n\n${out.report.report}`;
        document.getElementById("policeBtn").classList.remove("hidden");
      };

      document.getElementById("policeBtn").onclick = async () => {
        const out = await postJson("/upload/dispatch", {incident_id: lastUploadIncident, department: "Police"});
        toast(out.toast);
      };

      loadMeta();
      loadFeeds();
"""
    return _page("Monitoring", body, script)


def live_html(video_url: str) -> str:
    body = f"""
    <main class="pt-14 grid grid-cols-1 lg:grid-cols-3 gap-6 p-6">
      <div class="lg:col-span-2 aspect-video rounded-xl overflow-hidden border-2 border-emerald-600">
        <iframe width="100%" height="100%" src="{video_url}" title="Live feed" frameborder="0"
          allow="accelerometer; autoplay; encrypted-media; gyroscope; picture-in-picture" allowfullscreen></iframe>
      </div>
      <div class="rounded-xl border border-zinc-800 bg-zinc-900/40 p-4 flex flex-col h-[60vh]">
        <div class="t-18 font-semibold mb-2">Real-Time AI Log</div>
        <div id="logs" class="flex-1 overflow-y-auto space-y-2"></div>
      </div>
    </main>
"""
    script = r"""
      const TAG_CLASS = {destructive: "bg-rose-700", default: "bg-emerald-700", secondary: "bg-zinc-700", outline: "border border-zinc-600"};
      async function loadLogs() {
        const data = await api("/live/logs");
        const box = document.getElementById("logs");
        box.innerHTML = data.logs.map(l => `<div class="rounded-lg border border-zinc-800 p-2">
          <div class="t-12 text-zinc-500">${esc(l.timestamp)}</div><div class="t-14">${esc(l.text)}</div>
          <div class="flex gap-1 mt-1">${l.tags.map((t, i) => `<span class="t-12 rounded px-1.5 ${TAG_CLASS[l.variants[i]] || ""}">${esc(t)}</span>`).join("")}</div></div>`).join("")
          || `<div class="t-14 text-zinc-500">Connecting to feed...</div>`;
        box.scrollTop = box.scrollHeight;
      }
      postJson("/live/start").then(loadLogs);
      const timer = setInterval(loadLogs, 1500);
      window.addEventListener("beforeunload", () => { clearInterval(timer); navigator.sendBeacon("/live/stop"); });
"""
    return _page("Live Analysis", body, script)
