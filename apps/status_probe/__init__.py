"""
Status Probe App - SPN2 Queue Health Collector

Responsibilities:
- Fetch the SPN2 status endpoint once per invocation
- Validate the payload and its 'status' field
- Extract the queue metrics into a timestamped row
- Append the row to the CSV metric log (header written once)
- Persist a diagnostic bundle on any fetch/validation/extraction failure

Output:
- db.csv: timestamp,recent_captures,queue_spn2_captures,...
- data/log/[YYYY-MM-DD_HH-MM-SS]/error.log + raw_response.json on failure

Scheduling is external (cron, systemd timer); each invocation runs once.
"""
