"""Application layer – pagination shared by the task and user use cases."""
