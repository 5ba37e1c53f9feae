"""Static accessibility data for the Kathmandu University Dhulikhel campus."""

from ..models import GeoPoint, HazardPoint, SearchResult, Severity
from .geo import offset

CAMPUS_CENTER = GeoPoint(lat=27.6196, lon=85.5385)

# category key -> (label, severity)
ACCESSIBILITY_CATEGORIES: dict[str, tuple[str, Severity]] = {
    "ramp": ("Accessible Ramp", "info"),
    "broken_ramp": ("Broken Ramp", "hazard"),
    "elevator": ("Elevator", "info"),
    "no_elevator": ("No Elevator", "caution"),
    "washroom": ("Accessible WC", "info"),
    "wet_floor": ("Wet / Slippery", "caution"),
    "pothole": ("Pothole", "hazard"),
    "construction": ("Construction", "hazard"),
    "stairs": ("Stairs Only", "hazard"),
    "narrow_path": ("Narrow Path", "caution"),
    "tactile_paving": ("Tactile Paving", "info"),
    "bench": ("Rest Bench", "info"),
}

_ACCESS_POINTS = [
    (0.0010, 0.0005, "ramp", "Accessible ramp at the Main Gate entrance"),
    (-0.0015, -0.0010, "ramp", "Ramp at School of Engineering"),
    (0.0005, -0.0020, "ramp", "Accessible ramp at the Central Library"),
    (0.0020, 0.0015, "elevator", "Elevator, School of Management (3F)"),
    (-0.0005, 0.0025, "elevator", "Elevator, Admin Block"),
    (0.0000, 0.0010, "washroom", "Accessible washroom near canteen"),
    (-0.0008, -0.0030, "washroom", "Accessible WC, Medical Block"),
    (0.0018, -0.0005, "bench", "Rest bench in the amphitheatre area"),
    (-0.0012, 0.0018, "bench", "Shaded bench on the garden path"),
    (0.0025, -0.0012, "tactile_paving", "Tactile paving along the main corridor"),
    (0.0008, 0.0030, "pothole", "Large pothole on the eastern campus road"),
    (-0.0020, 0.0008, "pothole", "Uneven surface on the back road to the hostel"),
    (0.0030, -0.0018, "stairs", "Stairs only at the Science Block side entrance"),
    (-0.0025, -0.0015, "stairs", "Steep stairs at the IT Building rear exit"),
    (0.0012, 0.0020, "broken_ramp", "Broken ramp surface at the Sports Complex"),
    (-0.0030, 0.0005, "construction", "Construction zone at the New Academic Block"),
    (0.0005, -0.0012, "narrow_path", "Narrow pathway from E-Block to cafeteria"),
    (-0.0018, 0.0030, "narrow_path", "Tight passage by Civil Engineering Dept"),
    (0.0022, 0.0000, "wet_floor", "Flood-prone walkway by the basketball court"),
    (-0.0010, -0.0025, "no_elevator", "No elevator, Pharmacy Building (3F)"),
]


def campus_access_points(center: GeoPoint = CAMPUS_CENTER) -> list[HazardPoint]:
    points = []
    for d_lat, d_lon, category, description in _ACCESS_POINTS:
        p = offset(center, d_lat, d_lon)
        points.append(HazardPoint(
            lat=p.lat,
            lon=p.lon,
            severity=ACCESSIBILITY_CATEGORIES[category][1],
            category=category,
            description=description,
        ))
    return points


CAMPUS_PLACES: list[SearchResult] = [
    SearchResult(name="Main Gate", display_name="KU Main Gate, Dhulikhel",
                 lat=27.6208, lon=85.5375, place_type="gate", accessibility_score=9),
    SearchResult(name="Central Library", display_name="KU Central Library",
                 lat=27.6200, lon=85.5368, place_type="library", accessibility_score=8),
    SearchResult(name="School of Engineering", display_name="SoE, Kathmandu University",
                 lat=27.6190, lon=85.5380, place_type="building", accessibility_score=6),
    SearchResult(name="Admin Block", display_name="Administrative Block, KU",
                 lat=27.6196, lon=85.5395, place_type="admin", accessibility_score=8),
    SearchResult(name="KU Hospital", display_name="KU Hospital & School of Medicine",
                 lat=27.6180, lon=85.5355, place_type="hospital", accessibility_score=9),
    SearchResult(name="Cafeteria", display_name="Main Cafeteria, KU Campus",
                 lat=27.6198, lon=85.5378, place_type="food", accessibility_score=7),
    SearchResult(name="Sports Complex", display_name="KU Sports Complex",
                 lat=27.6210, lon=85.5400, place_type="sport", accessibility_score=5),
    SearchResult(name="Amphitheatre", display_name="Open Amphitheatre, KU",
                 lat=27.6192, lon=85.5370, place_type="venue", accessibility_score=7),
    SearchResult(name="IT Building", display_name="Dept. of CS & IT, KU",
                 lat=27.6185, lon=85.5388, place_type="building", accessibility_score=6),
    SearchResult(name="Hostel Area", display_name="Student Hostel Block, KU",
                 lat=27.6175, lon=85.5375, place_type="hostel", accessibility_score=5),
    SearchResult(name="Pharmacy Block", display_name="School of Pharmacy, KU",
                 lat=27.6202, lon=85.5360, place_type="building", accessibility_score=4),
    SearchResult(name="Civil Engineering", display_name="Dept. of Civil Engineering, KU",
                 lat=27.6188, lon=85.5398, place_type="building", accessibility_score=6),
]
