"""Document collection names and asset path prefixes.

The document store has no DDL. Collections exist once a document is written,
so these constants are the single source of truth for the "schema".
"""

COLLECTION_TEAM_MEMBERS = "teamMembers"
COLLECTION_HACKATHONS = "hackathons"
COLLECTION_ACHIEVEMENTS = "achievements"
COLLECTION_PROJECTS = "projects"
COLLECTION_BLOGS = "blogs"
COLLECTION_APPLICATIONS = "applications"
COLLECTION_CONTACT_MESSAGES = "contactMessages"
COLLECTION_SETTINGS = "settings"

# Object store prefixes
PREFIX_TEAM_MEMBERS = "team-members"
PREFIX_HACKATHONS = "hackathons"
PREFIX_ACHIEVEMENTS = "achievements"
PREFIX_PROJECTS = "projects"
PREFIX_BLOGS = "blogs"
PREFIX_AUDIO = "audio"
