from fastapi import APIRouter, Depends, Response

from mermaid_fragments.api.dependencies import get_issue_source
from mermaid_fragments.api.status import status_for
from mermaid_fragments.core.ports.store import IssueSource
from mermaid_fragments.core.service import get_issue_description, get_issue_fragments
from mermaid_fragments.models import IssueDescriptionResult, IssueFragmentsResult

router = APIRouter(prefix="/issues", tags=["issues"])


@router.get("/{issue_key}", response_model=IssueDescriptionResult)
async def issue_description(
    issue_key: str,
    response: Response,
    issues: IssueSource = Depends(get_issue_source),
) -> IssueDescriptionResult:
    result = await get_issue_description(issues, issue_key)
    response.status_code = status_for(result)
    return result


@router.get("/{issue_key}/fragments", response_model=IssueFragmentsResult)
async def issue_fragments(
    issue_key: str,
    response: Response,
    issues: IssueSource = Depends(get_issue_source),
) -> IssueFragmentsResult:
    """List the fenced Mermaid blocks found in the issue description."""
    result = await get_issue_fragments(issues, issue_key)
    response.status_code = status_for(result)
    return result
