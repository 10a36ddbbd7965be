"""CRUD record types exposed by the Wealthbox API."""

from .base import Resource

CONTACT_TYPES = ["Person", "Household", "Organization", "Trust"]
TASK_PRIORITIES = ["Low", "Medium", "High"]

CONTACT_ID = {"type": "integer", "minimum": 1, "description": "Contact to link the record to"}

CONTACTS = Resource(
    name="contacts",
    api_path="contacts",
    label="contact",
    fields={
        "first_name": {"type": "string"},
        "last_name": {"type": "string"},
        "type": {"type": "string", "enum": CONTACT_TYPES},
        "job_title": {"type": "string"},
        "company_name": {"type": "string"},
        "background_info": {"type": "string"},
        "email": {"type": "string", "description": "Principal email address"},
    },
)

TASKS = Resource(
    name="tasks",
    api_path="tasks",
    label="task",
    fields={
        "name": {"type": "string"},
        "due_date": {"type": "string", "description": "Due date, e.g. 2024-05-01 10:00 AM -0400"},
        "description": {"type": "string"},
        "priority": {"type": "string", "enum": TASK_PRIORITIES},
        "assigned_to": {"type": "integer", "description": "User id"},
        "complete": {"type": "boolean"},
        "contact_id": CONTACT_ID,
    },
)

EVENTS = Resource(
    name="events",
    api_path="events",
    label="event",
    fields={
        "title": {"type": "string"},
        "starts_at": {"type": "string"},
        "ends_at": {"type": "string"},
        "location": {"type": "string"},
        "description": {"type": "string"},
        "all_day": {"type": "boolean"},
        "contact_id": CONTACT_ID,
    },
)

NOTES = Resource(
    name="notes",
    api_path="notes",
    label="note",
    fields={
        "content": {"type": "string"},
        "contact_id": CONTACT_ID,
    },
    # Wealthbox does not allow deleting notes
    actions=("list", "get", "create", "update"),
)

OPPORTUNITIES = Resource(
    name="opportunities",
    api_path="opportunities",
    label="opportunity",
    fields={
        "name": {"type": "string"},
        "stage": {"type": "integer", "description": "Opportunity stage id"},
        "probability": {"type": "integer", "minimum": 0, "maximum": 100},
        "target_close": {"type": "string"},
        "description": {"type": "string"},
        "contact_id": CONTACT_ID,
    },
)

PROJECTS = Resource(
    name="projects",
    api_path="projects",
    label="project",
    fields={
        "name": {"type": "string"},
        "description": {"type": "string"},
        "organizer": {"type": "integer", "description": "User id of the organizer"},
    },
)

WORKFLOWS = Resource(
    name="workflows",
    api_path="workflows",
    label="workflow",
    fields={
        "workflow_template": {"type": "integer", "description": "Workflow template id"},
        "label": {"type": "string"},
        "contact_id": CONTACT_ID,
    },
    actions=("list", "get", "create", "delete"),
)

WORKFLOW_TEMPLATES = Resource(
    name="workflowTemplates",
    api_path="workflow_templates",
    label="workflow template",
    actions=("list", "get"),
)

RESOURCES = [
    CONTACTS,
    TASKS,
    EVENTS,
    NOTES,
    OPPORTUNITIES,
    PROJECTS,
    WORKFLOWS,
    WORKFLOW_TEMPLATES,
]
