"""
Fixed street cameras around Thiruvananthapuram and the proximity matching
that pins incidents onto them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set
from ..shared.incidents import Incident

MATCH_EPSILON = 0.01
MAP_CENTER = {"lat": 8.5241, "lng": 76.9366}


@dataclass(frozen=True)
class CameraLocation:
    id: str
    name: str
    lat: float
    lon: float


CAMERA_LOCATIONS: List[CameraLocation] = [
    CameraLocation("cam1", "Technopark Main Gate", 8.556, 76.825),
    CameraLocation("cam2", "East Fort Junction", 8.483, 76.946),
    CameraLocation("cam3", "Kowdiar Palace View", 8.515, 76.945),
    CameraLocation("cam4", "Shanghumugham Beach Front", 8.479, 76.907),
    CameraLocation("cam5", "Pattom Central", 8.518, 76.920),
    CameraLocation("cam6", "Kazhakootam Junction", 8.568, 76.873),
    CameraLocation("cam7", "Museum Complex", 8.508, 76.952),
    CameraLocation("cam8", "Thampanoor Railway Station", 8.488, 76.950),
    CameraLocation("cam9", "Secretariat North Gate", 8.495, 76.945),
    CameraLocation("cam10", "Vellayambalam Square", 8.511, 76.958),
]


@dataclass(frozen=True)
class CameraMarker:
    camera: CameraLocation
    incident: Optional[Incident] = None
    is_new: bool = False

    @property
    def state(self) -> str:
        if self.incident is None:
            return "idle"
        return self.incident.status.lower()

    def to_json(self) -> dict:
        return {
            "id": self.camera.id,
            "name": self.camera.name,
            "lat": self.camera.lat,
            "lon": self.camera.lon,
            "state": self.state,
            "isNew": self.is_new,
            "incidentId": self.incident.id if self.incident else None,
            "incidentTitle": self.incident.title if self.incident else None,
        }


def within(incident: Incident, camera: CameraLocation, epsilon: float = MATCH_EPSILON) -> bool:
    return abs(incident.latitude - camera.lat) < epsilon and abs(incident.longitude - camera.lon) < epsilon


def incident_at(
    camera: CameraLocation,
    incidents: Iterable[Incident],
    epsilon: float = MATCH_EPSILON,
) -> Optional[Incident]:
    # First active match in list order; the store is newest-first.
    for inc in incidents:
        if inc.is_active and within(inc, camera, epsilon):
            return inc
    return None


def match_cameras(
    incidents: Iterable[Incident],
    cameras: Iterable[CameraLocation] = CAMERA_LOCATIONS,
    epsilon: float = MATCH_EPSILON,
    newly_added: Optional[Set[str]] = None,
) -> List[CameraMarker]:
    incidents = list(incidents)
    fresh = newly_added or set()
    out: List[CameraMarker] = []
    for cam in cameras:
        inc = incident_at(cam, incidents, epsilon)
        out.append(CameraMarker(camera=cam, incident=inc, is_new=bool(inc and inc.id in fresh)))
    return out
