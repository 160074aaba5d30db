"""Services — orchestration over the store and upstream clients."""
