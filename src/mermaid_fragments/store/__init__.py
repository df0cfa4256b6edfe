from mermaid_fragments.store.confluence import ConfluenceDocumentStore
from mermaid_fragments.store.jira import JiraIssueSource
from mermaid_fragments.store.memory import InMemoryDocumentStore, InMemoryIssueSource
from mermaid_fragments.store.settings import AtlassianSettings, get_http_client, get_settings

__all__ = [
    "AtlassianSettings",
    "ConfluenceDocumentStore",
    "InMemoryDocumentStore",
    "InMemoryIssueSource",
    "JiraIssueSource",
    "get_http_client",
    "get_settings",
]
