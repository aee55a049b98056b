#!/usr/bin/env python3
import asyncio
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path

import jwt
from supabase import Client, create_client

# Add the project root to Python path so we can import from rehearsal
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from prisma import Prisma
from prisma.enums import MemberStatus, TeamRole
from rehearsal.core.settings import settings

BUCKETS = {
    settings.VIDEO_BUCKET: {
        "public": False,
        "file_size_limit": settings.MAX_VIDEO_UPLOAD_BYTES,
        "allowed_mime_types": settings.ALLOWED_VIDEO_MIME_TYPES,
    },
    settings.SCREENSHOT_BUCKET: {
        "public": True,
        "file_size_limit": 10 * 1024 * 1024,
        "allowed_mime_types": ["image/png"],
    },
}


async def setup_storage_buckets(supabase: Client):
    """Create the video and screenshot storage buckets"""
    print("🗂️ Setting up storage buckets...")

    try:
        existing = {bucket.name for bucket in supabase.storage.list_buckets()}

        for name, options in BUCKETS.items():
            if name in existing:
                print(f"ℹ️ Storage bucket already exists: {name}")
                continue
            supabase.storage.create_bucket(name, options=options)
            print(f"✅ Created storage bucket: {name}")

    except Exception as e:
        print(f"❌ Storage bucket setup failed: {e}")


async def main():
    print("🌱 Starting database seed...")

    prisma = Prisma()
    await prisma.connect()

    supabase: Client | None = (
        create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
        if settings.SUPABASE_URL and settings.SUPABASE_SERVICE_ROLE_KEY
        else None
    )

    try:
        auth_id = str(uuid.uuid4())
        email = "director@example.com"

        profile = await prisma.profile.find_unique(where={"email": email})
        if not profile:
            profile = await prisma.profile.create(
                data={
                    "email": email,
                    "firstName": "Demo",
                    "lastName": "Owner",
                    "displayName": "Demo Owner",
                }
            )
            await prisma.authlink.create(
                data={
                    "authId": auth_id,
                    "profileId": profile.id,
                    "provider": "supabase",
                    "providerUserId": auth_id,
                }
            )
            print(f"✅ Created profile: {profile.email}")

            team = await prisma.team.create(
                data={"name": "Spring Showcase", "createdById": profile.id}
            )
            await prisma.teammember.create(
                data={
                    "teamId": team.id,
                    "profileId": profile.id,
                    "email": profile.email,
                    "role": TeamRole.owner,
                    "status": MemberStatus.active,
                    "invitedById": profile.id,
                }
            )
            project = await prisma.project.create(
                data={
                    "teamId": team.id,
                    "name": "Opening Number",
                    "description": "Full run-throughs and section cleanups",
                    "createdById": profile.id,
                }
            )
            print(f"✅ Created team {team.name} with project {project.name}")
        else:
            print(f"ℹ️ Profile already exists: {email}")
            auth_link = await prisma.authlink.find_first(
                where={"profileId": profile.id}
            )
            if auth_link:
                auth_id = auth_link.authId

        if settings.JWT_SECRET:
            token = jwt.encode(
                {
                    "sub": auth_id,
                    "email": email,
                    "iat": datetime.now(timezone.utc),
                    "aud": "authenticated",
                    "iss": "supabase",
                },
                settings.JWT_SECRET,
                algorithm="HS256",
            )
            print("📋 Demo user details:")
            print(f"   Email: {email}")
            print(f"   Auth ID: {auth_id}")
            print(f"   Authorization Header: Bearer {token}")
        else:
            print("ℹ️ JWT_SECRET not set - skipping development token")

        if supabase:
            await setup_storage_buckets(supabase)
        else:
            print("ℹ️ Skipping storage bucket setup - Supabase not configured")

        print("🌱 Seed completed successfully!")

    except Exception as e:
        print(f"❌ Seed failed: {e}")
        raise
    finally:
        await prisma.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
