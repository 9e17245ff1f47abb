from bs4 import BeautifulSoup

from conftest import FIXED_NOW, NY_TZ, make_request
from weathermail.report.location import format_location_report
from weathermail.validation import extract_temperatures, is_valid_html, validate_formatted_report


def _lines(report):
    return report.weather_info.split("\n")


def test_nyc_current_conditions(payload, nyc):
    report = format_location_report(payload, nyc, tz=NY_TZ, now=FIXED_NOW)
    info = report.weather_info
    assert "Current Conditions: ☀️ Clear" in info
    assert "Temperature: 72°F" in info
    assert "Feels Like: 70°F" in info
    assert "Humidity: 65%" in info
    assert "Wind Speed: 9 mph" in info
    assert "Wind Gust: 12 mph" in info
    assert "Precipitation Probability: 15%" in info
    assert "Cloud Cover: 24%" in info
    assert "UV Index: 3" in info
    assert "Visibility: 10 miles" in info
    assert "Pressure: 1013 mb" in info


def test_report_fields(payload, nyc):
    report = format_location_report(payload, nyc, tz=NY_TZ, now=FIXED_NOW)
    assert report.location == "NYC"
    assert report.coordinates == "40.7128, -74.006"
    assert report.temperature == 72
    assert report.conditions == "clear-day"
    assert report.timestamp == FIXED_NOW.isoformat()
    assert report.raw_data is payload
    assert validate_formatted_report(report).valid


def test_today_block_uses_local_clock(payload, nyc):
    report = format_location_report(payload, nyc, now=FIXED_NOW)
    info = report.weather_info
    assert "High: 78°F at 03:00 PM" in info
    assert "Low: 62°F at 06:00 AM" in info
    assert "Summary: Partly cloudy throughout the day." in info


def test_six_hour_block_is_sliced_in_order(payload, nyc):
    lines = _lines(format_location_report(payload, nyc, now=FIXED_NOW))
    start = lines.index("6-Hour Forecast:") + 1
    hours = lines[start : lines.index("", start)]
    assert hours == [
        "08:00 AM: 72°F, ☀️ Clear",
        "09:00 AM: 73°F, ⛅ Partly Cloudy",
        "10:00 AM: 74°F, ⛅ Partly Cloudy",
        "11:00 AM: 73°F, ☁️ Cloudy",
        "12:00 PM: 71°F, 🌧️ Rain",
        "01:00 PM: 68°F, 🌧️ Rain",
    ]


def test_seven_day_block(payload, nyc):
    lines = _lines(format_location_report(payload, nyc, now=FIXED_NOW))
    days = lines[lines.index("7-Day Forecast:") + 1 :]
    assert len(days) == 7
    assert days[0] == "Wednesday: High 78°F, Low 62°F, ⛅ Partly Cloudy, 10% precip"
    assert days[2] == "Friday: High 69°F, Low 58°F, 🌧️ Rain, 80% precip"
    assert days[5].startswith("Monday:")
    assert days[5].endswith("0% precip")
    assert days[-1].startswith("Tuesday:")


def test_metric_units(payload):
    report = format_location_report(payload, make_request(units="si"), now=FIXED_NOW)
    assert "Temperature: 72°C" in report.weather_info
    assert "Wind Speed: 9 m/s" in report.weather_info
    assert "mph" not in report.weather_info


def test_short_sequences_render_what_exists(payload, nyc):
    payload["hourly"]["data"] = payload["hourly"]["data"][:2]
    payload["daily"]["data"] = payload["daily"]["data"][:3]
    lines = _lines(format_location_report(payload, nyc, now=FIXED_NOW))
    start = lines.index("6-Hour Forecast:") + 1
    assert lines[start : lines.index("", start)] == ["08:00 AM: 72°F, ☀️ Clear", "09:00 AM: 73°F, ⛅ Partly Cloudy"]
    assert len(lines[lines.index("7-Day Forecast:") + 1 :]) == 3


def test_empty_payload_degrades_to_placeholders(nyc):
    report = format_location_report({}, nyc, now=FIXED_NOW)
    info = report.weather_info
    assert "Current Conditions: 🌤️ Unknown" in info
    assert "Temperature: N/A" in info
    assert "Humidity: N/A" in info
    assert "Precipitation Probability: 0%" in info
    assert "Cloud Cover: 0%" in info
    assert "UV Index: N/A" in info
    assert "Visibility: N/A" in info
    assert "Pressure: N/A" in info
    assert "High: N/A" in info
    assert "Summary: No summary available" in info
    assert info.endswith("7-Day Forecast:")
    assert report.temperature is None
    assert report.coordinates == "40.7128, -74.006"
    assert is_valid_html(report.html_body)


def test_summary_falls_back_to_current(payload, nyc):
    del payload["daily"]["data"][0]["summary"]
    report = format_location_report(payload, nyc, now=FIXED_NOW)
    assert "Summary: Clear" in report.weather_info


def test_freezing_temperatures_are_shown(payload, nyc):
    payload["currently"]["temperature"] = 0
    report = format_location_report(payload, nyc, now=FIXED_NOW)
    assert "Temperature: 0°F" in report.weather_info
    assert report.temperature == 0


def test_html_document_structure(payload, nyc):
    report = format_location_report(payload, nyc, now=FIXED_NOW)
    assert is_valid_html(report.html_body)
    soup = BeautifulSoup(report.html_body, "html.parser")
    assert soup.head.style is not None
    assert soup.find(class_="location").get_text(strip=True) == "NYC"
    assert soup.find(class_="temperature").get_text(strip=True) == "72°F"
    assert len(soup.find_all(class_="hourly-item")) == 6
    assert len(soup.find_all(class_="forecast-day")) == 7
    assert report.html_section in report.html_body


def test_html_escapes_location_names(payload):
    report = format_location_report(payload, make_request(name="<b>Tom & Jerry</b>"), now=FIXED_NOW)
    assert "<b>Tom" not in report.html_body
    assert "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;" in report.html_body


def test_text_temperatures_round_trip_through_extractor(payload, nyc):
    report = format_location_report(payload, nyc, now=FIXED_NOW)
    temps = extract_temperatures(report.weather_info)
    assert temps[:3] == [72, 70, 78]


def test_coordinates_fall_back_to_request_without_exponents(payload):
    payload.pop("latitude")
    payload.pop("longitude")
    report = format_location_report(payload, make_request("Equator", lat=0.00001, lon=10.0), now=FIXED_NOW)
    assert report.coordinates == "0.00001, 10"
    header = BeautifulSoup(report.html_body, "html.parser").select_one(".coordinates")
    assert header.get_text().strip() == "0.00001°, 10°"
