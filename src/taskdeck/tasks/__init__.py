"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskDraft, Attachment, Priority)
- task_api.py: async REST client for the remote task collection
- task_store.py: in-memory snapshot, refreshed wholesale after every mutation
- task_views.py: pure filtering/sorting/statistics/deadline classification
- task_actions.py: user-initiated mutations (add, toggle, edit, delete, bulk, export)
- task_scheduler.py: polling loop that raises deadline reminders
- attachments.py: file <-> data URL encoding
"""
