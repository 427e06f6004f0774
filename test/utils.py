"""Shared fixtures data for client tests."""

WEBSITE = "https://quafu.example.org/"
TOKEN = "tok-1234567890abcdef"

BACKENDS_PAYLOAD = {
    "data": [
        {"system_name": "Dongling", "system_id": 5, "qubit_num": 136, "status": "Online"},
        {"system_name": "ScQ-P10", "system_id": 0, "qubit_num": 10, "status": "Offline"},
        {"system_id": 99},
    ]
}
