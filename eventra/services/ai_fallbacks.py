"""
Static suggestion tables served when the AI model is unavailable
"""

DEFAULT_COLOR_SCHEME = ["#4F46E5", "#10B981", "#F3F4F6"]

FALLBACK_SUGGESTIONS = {
    "conference": {
        "events": [
            {
                "id": "conf1",
                "title": "Tech Industry Summit",
                "description": "A professional gathering of industry leaders to discuss emerging technologies and trends.",
                "complexity": 4,
                "estimated_cost": 5000,
                "suggested_duration": "2 days",
            },
            {
                "id": "conf2",
                "title": "Product Launch Conference",
                "description": "Showcase your new product with demos, presentations, and networking opportunities.",
                "complexity": 3,
                "estimated_cost": 3500,
                "suggested_duration": "1 day",
            },
        ],
        "themes": [
            {
                "id": "theme1",
                "name": "Innovation Showcase",
                "description": "Highlight cutting-edge technologies with interactive demonstrations and futuristic aesthetics.",
                "color_scheme": ["#4F46E5", "#10B981", "#F3F4F6"],
                "suitable": ["conference", "webinar"],
            },
            {
                "id": "theme2",
                "name": "Professional Network",
                "description": "Classic corporate styling with emphasis on networking and professional development.",
                "color_scheme": ["#1E293B", "#475569", "#F8FAFC"],
                "suitable": ["conference", "seminar"],
            },
        ],
        "tasks": [
            {
                "title": "Secure keynote speakers",
                "description": "Research and invite industry experts for keynote presentations.",
                "due_date": "60 days before event",
                "priority": "high",
            },
            {
                "title": "Create conference schedule",
                "description": "Plan sessions, breaks, and networking events for optimal attendee experience.",
                "due_date": "45 days before event",
                "priority": "high",
            },
            {
                "title": "Setup virtual platform",
                "description": "Configure virtual conferencing software for presentations and sessions.",
                "due_date": "30 days before event",
                "priority": "high",
            },
        ],
    },
    "birthday": {
        "events": [
            {
                "id": "bday1",
                "title": "Virtual Birthday Celebration",
                "description": "A fun virtual party with games, virtual cake cutting, and shared experiences.",
                "complexity": 2,
                "estimated_cost": 200,
                "suggested_duration": "2-3 hours",
            },
            {
                "id": "bday2",
                "title": "Hybrid Birthday Experience",
                "description": "Combining in-person gathering with virtual attendees for an inclusive celebration.",
                "complexity": 3,
                "estimated_cost": 500,
                "suggested_duration": "4 hours",
            },
        ],
        "themes": [
            {
                "id": "btheme1",
                "name": "Digital Party",
                "description": "Fun, colorful theme with interactive games and virtual party elements.",
                "color_scheme": ["#EC4899", "#8B5CF6", "#FECACA"],
                "suitable": ["birthday", "celebration"],
            },
            {
                "id": "btheme2",
                "name": "Elegant Celebration",
                "description": "Sophisticated styling with elegant visuals and classy virtual environments.",
                "color_scheme": ["#6D28D9", "#F59E0B", "#F3F4F6"],
                "suitable": ["birthday", "anniversary"],
            },
        ],
        "tasks": [
            {
                "title": "Send digital invitations",
                "description": "Create and send virtual invites with event details and joining instructions.",
                "due_date": "14 days before event",
                "priority": "high",
            },
            {
                "title": "Arrange virtual activities",
                "description": "Plan interactive games and activities that work well in a virtual setting.",
                "due_date": "7 days before event",
                "priority": "medium",
            },
            {
                "title": "Coordinate virtual cake cutting",
                "description": "Arrange for everyone to have cake delivered or prepare their own for synchronized celebration.",
                "due_date": "3 days before event",
                "priority": "medium",
            },
        ],
    },
    "webinar": {
        "events": [
            {
                "id": "web1",
                "title": "Educational Webinar Series",
                "description": "A series of informative sessions with expert presenters and Q&A opportunities.",
                "complexity": 3,
                "estimated_cost": 1000,
                "suggested_duration": "1-2 hours per session",
            },
            {
                "id": "web2",
                "title": "Interactive Workshop",
                "description": "Hands-on learning experience with practical exercises and direct feedback.",
                "complexity": 4,
                "estimated_cost": 1500,
                "suggested_duration": "3 hours",
            },
        ],
        "themes": [
            {
                "id": "wtheme1",
                "name": "Knowledge Share",
                "description": "Clean, minimalist design focusing on content and learning experience.",
                "color_scheme": ["#0EA5E9", "#475569", "#F8FAFC"],
                "suitable": ["webinar", "workshop"],
            },
            {
                "id": "wtheme2",
                "name": "Digital Classroom",
                "description": "Educational aesthetics with interactive elements and engagement features.",
                "color_scheme": ["#10B981", "#6366F1", "#FFFFFF"],
                "suitable": ["webinar", "training"],
            },
        ],
        "tasks": [
            {
                "title": "Prepare presentation materials",
                "description": "Create slides, demos, and supporting materials for webinar content.",
                "due_date": "14 days before event",
                "priority": "high",
            },
            {
                "title": "Test technical setup",
                "description": "Run through platform features, presentation sharing, and audience interaction tools.",
                "due_date": "7 days before event",
                "priority": "high",
            },
            {
                "title": "Create follow-up content",
                "description": "Prepare resources to share with attendees after the webinar.",
                "due_date": "3 days before event",
                "priority": "medium",
            },
        ],
    },
    "other": {
        "events": [
            {
                "id": "other1",
                "title": "Custom Virtual Event",
                "description": "Tailored virtual experience based on your specific needs and goals.",
                "complexity": 3,
                "estimated_cost": 1500,
                "suggested_duration": "2-4 hours",
            },
        ],
        "themes": [
            {
                "id": "otheme1",
                "name": "Flexible Design",
                "description": "Adaptable theme that can be customized for various event types and purposes.",
                "color_scheme": ["#4F46E5", "#F97316", "#F8FAFC"],
                "suitable": ["other", "custom"],
            },
        ],
        "tasks": [
            {
                "title": "Define event objectives",
                "description": "Establish clear goals and desired outcomes for your event.",
                "due_date": "30 days before event",
                "priority": "high",
            },
            {
                "title": "Create custom event plan",
                "description": "Develop detailed timeline and format based on event objectives.",
                "due_date": "21 days before event",
                "priority": "high",
            },
        ],
    },
}

FALLBACK_BUDGET_ALLOCATIONS = {
    "conference": {
        "Virtual Platform": 0.30,
        "Speakers/Presenters": 0.25,
        "Marketing": 0.20,
        "Staff": 0.15,
        "Contingency": 0.10,
    },
    "birthday": {
        "Virtual Platform": 0.20,
        "Digital Activities": 0.30,
        "Gifts/Deliveries": 0.35,
        "Decorations": 0.15,
    },
    "webinar": {
        "Virtual Platform": 0.35,
        "Presenters": 0.30,
        "Marketing": 0.20,
        "Materials": 0.15,
    },
    "default": {
        "Virtual Platform": 0.25,
        "Content Creation": 0.25,
        "Marketing": 0.20,
        "Staff": 0.20,
        "Contingency": 0.10,
    },
}

# Keyed by event format
FALLBACK_IMPROVEMENTS = {
    "virtual": [
        {
            "area": "Engagement",
            "title": "Schedule interactive breaks",
            "description": "Remote attendees drop off during long stretches of one-way content.",
            "impact": "high",
            "implementation": "Add a poll, Q&A or breakout session at least every 30 minutes of programme.",
            "resources": ["Live polling tools", "Breakout rooms"],
        },
        {
            "area": "Technical",
            "title": "Run a full technical rehearsal",
            "description": "Audio, screen sharing and permissions issues are the most common cause of a poor virtual experience.",
            "impact": "high",
            "implementation": "Rehearse with every presenter on the final platform two to three days before the event.",
            "resources": ["Platform test room", "Backup presenter checklist"],
        },
        {
            "area": "Content",
            "title": "Share a recording and resources afterwards",
            "description": "Attendees in other time zones often miss parts of the live session.",
            "impact": "medium",
            "implementation": "Publish the recording with slides and links within 24 hours and email all registered guests.",
            "resources": [],
        },
    ],
    "hybrid": [
        {
            "area": "Engagement",
            "title": "Give remote attendees an equal voice",
            "description": "Hybrid events tend to favour the people in the room.",
            "impact": "high",
            "implementation": "Assign a moderator to relay online questions and alternate between in-room and remote speakers.",
            "resources": ["Q&A moderation tool"],
        },
        {
            "area": "Technical",
            "title": "Dedicated audio for the stream",
            "description": "Room microphones rarely produce usable sound for online viewers.",
            "impact": "high",
            "implementation": "Feed the stream from the venue mixing desk and test it from a remote device before doors open.",
            "resources": ["Venue AV team"],
        },
        {
            "area": "Logistics",
            "title": "Publish a schedule for both audiences",
            "description": "Breaks and networking slots mean different things on site and online.",
            "impact": "medium",
            "implementation": "Mark which sessions are streamed and plan online-only activities during in-person breaks.",
            "resources": [],
        },
    ],
    "in-person": [
        {
            "area": "Logistics",
            "title": "Confirm the venue run sheet",
            "description": "Late changes to room setup and catering times cause most on-site delays.",
            "impact": "high",
            "implementation": "Walk through the run sheet with the venue and every vendor one week before the event.",
            "resources": ["Vendor contact list"],
        },
        {
            "area": "Engagement",
            "title": "Plan structured networking",
            "description": "Guests who do not know each other rarely mingle without prompts.",
            "impact": "medium",
            "implementation": "Add icebreakers, themed tables or a short speed-networking slot to the agenda.",
            "resources": [],
        },
        {
            "area": "Follow-up",
            "title": "Collect feedback on the day",
            "description": "Response rates fall quickly once guests have left.",
            "impact": "medium",
            "implementation": "Display a QR code to the feedback form during closing remarks.",
            "resources": ["Event QR code"],
        },
    ],
}
