"""AMF metrics tooling: NGAP cause-string generator and Prometheus counters."""
