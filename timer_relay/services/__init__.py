# Service layer for the timer relay commander
# - device_client: async HTTP client for the ESP32 relay controller API
# - device_sync:   per-view status poller and command dispatcher
