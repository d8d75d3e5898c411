"""Android release agent: build commands and the full release pipeline."""

from pathlib import Path
from typing import List, Optional
import os

import structlog

from agents.base import Agent, tail
from workflows.android import create_android_release_workflow, create_android_workflow

logger = structlog.get_logger(__name__)

RELEASE_COMMAND = "android:release"
APK_OUTPUT_DIR = Path("android/app/build/outputs/apk/release")


def find_apks(project_path: str) -> List[Path]:
    """Release APKs produced by the last build, newest first."""
    output_dir = Path(project_path) / APK_OUTPUT_DIR
    if not output_dir.is_dir():
        return []
    return sorted(output_dir.glob("*.apk"), key=lambda p: p.stat().st_mtime, reverse=True)


class AndroidReleaseAgent(Agent):
    """Runs shell commands in a React Native project on a long timeout."""

    name = "android"

    def resolve_project_path(self, project_path: Optional[str] = None) -> str:
        return project_path or self.settings.android_project_path or os.getcwd()

    async def process_command(
        self,
        command: str,
        project_path: Optional[str] = None,
        run_gradle_clean: str = "auto",
    ) -> str:
        """
        Run ``command`` in the project. ``android:release`` triggers the full
        release pipeline; gradle clean only runs when ``run_gradle_clean`` is
        ``"yes"``.
        """
        project_path = self.resolve_project_path(project_path)

        if command.strip() == RELEASE_COMMAND:
            return await self.build_android_release(project_path, skip_clean=run_gradle_clean != "yes")

        execution = await self.run(create_android_workflow(command, project_path, settings=self.settings))
        if not execution.is_success:
            return "\n".join([
                "**❌ Command Failed**",
                "",
                f"**Command:** {command}",
                f"**Project Path:** {project_path}",
                f"**Error:** {execution.error}",
            ])

        return "\n".join([
            "**✅ Command Executed Successfully**",
            "",
            f"**Command:** {command}",
            f"**Project Path:** {project_path}",
            "",
            "**Output:**",
            "```",
            tail(execution.data.get("stdout", "")),
            "```",
        ])

    async def build_android_release(
        self,
        project_path: Optional[str] = None,
        skip_clean: bool = True,
    ) -> str:
        project_path = self.resolve_project_path(project_path)
        android_path = Path(project_path) / "android"

        if not android_path.is_dir():
            return "\n".join([
                "**❌ Android folder not found**",
                "",
                f"**Project Path:** {project_path}",
                f"**Expected:** {android_path}",
            ])

        logger.info("android_release_started", project_path=project_path, gradle_clean=not skip_clean)
        workflow = create_android_release_workflow(
            project_path,
            run_gradle_clean=not skip_clean,
            settings=self.settings,
        )
        execution = await self.run(workflow)

        clean_status = (
            "⏭️ Gradle clean skipped (build folder deletion gives a clean build)"
            if skip_clean
            else "✅ Gradle clean ran"
        )
        steps = [
            "1. Yarn install",
            "2. Build folder deletion",
            f"3. {clean_status}",
            "4. Release build (assembleRelease)",
        ]

        if not execution.is_success:
            return "\n".join([
                "**❌ Android Release Build Failed**",
                "",
                f"**Failed at step:** {execution.node_executions[-1] if execution.node_executions else 'start'}",
                f"**Error:** {execution.error}",
                "",
                "**Pipeline:**",
                *steps,
            ])

        build_output = (execution.data.get("assembleRelease") or {}).get("stdout", "")
        apks = find_apks(project_path)
        header = (
            "**✅ Android Release Build Completed Successfully**"
            if apks
            else "**⚠️ Build Completed But APK Not Found**"
        )
        location = f"**📱 APK Location:** {apks[0]}" if apks else f"Check: {APK_OUTPUT_DIR}/"

        return "\n".join([
            header,
            "",
            "**Build Steps Completed:**",
            *steps,
            "",
            location,
            "",
            "**Build Output:**",
            "```",
            tail(build_output),
            "```",
        ])
