# rehearsal/domains/projects/service.py
import logging
from typing import List, Optional

from prisma.enums import VideoSourceType
from prisma.errors import PrismaError
from prisma.models import Profile

from prisma import Prisma
from rehearsal.core.storage import StorageService
from rehearsal.domains.projects.models import (
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from rehearsal.domains.videos.service import remove_stored_video_files
from rehearsal.shared.exceptions import AccessDeniedError, UpstreamFailureError
from rehearsal.shared.permissions import AccessControl, Capability, ResourceRef

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, db: Prisma, storage: Optional[StorageService] = None):
        self.db = db
        self.storage = storage
        self.access = AccessControl(db)

    async def create_project(
        self, team_id: str, data: ProjectCreate, profile: Profile
    ) -> ProjectResponse:
        await self.access.require(
            ResourceRef.team(team_id),
            profile.id,
            Capability.EDIT,
            "Only owners and directors can create projects",
        )

        try:
            project = await self.db.project.create(
                data={
                    "teamId": team_id,
                    "name": data.name,
                    "description": data.description or None,
                    "createdById": profile.id,
                }
            )
        except PrismaError as e:
            logger.error(f"Failed to create project in team {team_id}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(f"Project {project.id} created in team {team_id} by {profile.id}")
        return ProjectResponse.model_validate(project)

    async def list_projects(self, team_id: str, profile: Profile) -> List[ProjectResponse]:
        """
        Get a team's projects, most recently updated first.
        """
        await self.access.require(ResourceRef.team(team_id), profile.id, Capability.VIEW)

        try:
            projects = await self.db.project.find_many(
                where={"teamId": team_id}, order={"updatedAt": "desc"}
            )
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        return [ProjectResponse.model_validate(project) for project in projects]

    async def get_project(self, project_id: str, profile: Profile) -> ProjectResponse:
        await self.access.require(
            ResourceRef.project(project_id), profile.id, Capability.VIEW
        )

        try:
            project = await self.db.project.find_unique(where={"id": project_id})
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        if not project:
            raise AccessDeniedError()
        return ProjectResponse.model_validate(project)

    async def update_project(
        self, project_id: str, updates: ProjectUpdate, profile: Profile
    ) -> ProjectResponse:
        await self.access.require(
            ResourceRef.project(project_id),
            profile.id,
            Capability.EDIT,
            "Only owners and directors can edit projects",
        )

        try:
            project = await self.db.project.update(
                where={"id": project_id},
                data=updates.model_dump(exclude_unset=True),
            )
        except PrismaError as e:
            raise UpstreamFailureError(str(e))

        if not project:
            raise AccessDeniedError()
        return ProjectResponse.model_validate(project)

    async def delete_project(self, project_id: str, profile: Profile) -> None:
        """
        Delete a project with its videos and notes.

        Stored files of uploaded videos are removed after the rows are gone.
        """
        await self.access.require(
            ResourceRef.project(project_id),
            profile.id,
            Capability.OWNER_ONLY,
            "Only owners can delete projects",
        )

        try:
            uploads = await self.db.video.find_many(
                where={"projectId": project_id, "sourceType": VideoSourceType.upload}
            )
            await self.db.project.delete(where={"id": project_id})
        except PrismaError as e:
            logger.error(f"Failed to delete project {project_id}: {e}")
            raise UpstreamFailureError(str(e))

        logger.info(f"Project {project_id} deleted by profile {profile.id}")
        await remove_stored_video_files(self.storage, uploads)
