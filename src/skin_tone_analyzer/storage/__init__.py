"""Best-effort object storage for original and processed images."""
