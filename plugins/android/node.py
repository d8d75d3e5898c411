"""Android build workflow node."""

from pathlib import Path
from typing import Any, Dict
import asyncio
import shutil

import structlog

from core.errors import CommandTimeout
from core.workflow.models import NodeExecuteResult, WorkflowData
from core.workflow.node import NodeDefinition, NodeParameter, ParameterType
from plugins.base import PluginNode
from plugins.android.client import CommandRunner

DEFAULT_BUILD_FOLDER = "android/app/build"

logger = structlog.get_logger(__name__)


class AndroidNode(PluginNode):
    """Run a shell command inside an Android project, or wipe its build output."""

    def describe(self) -> NodeDefinition:
        return NodeDefinition(
            name="android",
            display_name="Android",
            description="Run build commands in an Android / React Native project",
            group=["build"],
            defaults={"name": "Android"},
            properties=[
                NodeParameter(
                    name="operation",
                    display_name="Operation",
                    type=ParameterType.OPTIONS,
                    default="runCommand",
                    required=True,
                    options=[
                        {"name": "Run Command", "value": "runCommand"},
                        {"name": "Clean Build Folder", "value": "cleanBuildFolder"},
                    ],
                ),
                NodeParameter(
                    name="command",
                    display_name="Command",
                    type=ParameterType.STRING,
                    default="",
                    description="Shell command, e.g. 'cd android && ./gradlew assembleRelease'",
                ),
                NodeParameter(
                    name="projectPath",
                    display_name="Project Path",
                    type=ParameterType.STRING,
                    default="",
                    required=True,
                ),
                NodeParameter(
                    name="timeout",
                    display_name="Timeout (seconds)",
                    type=ParameterType.NUMBER,
                    default=300,
                ),
                NodeParameter(
                    name="ignoreFailure",
                    display_name="Ignore Failure",
                    type=ParameterType.BOOLEAN,
                    default=False,
                    description="Report a non-zero exit code instead of failing",
                ),
                NodeParameter(
                    name="outputKey",
                    display_name="Output Key",
                    type=ParameterType.STRING,
                    default="",
                    description="Nest this step's output under the given key",
                ),
                NodeParameter(
                    name="buildFolder",
                    display_name="Build Folder",
                    type=ParameterType.STRING,
                    default=DEFAULT_BUILD_FOLDER,
                    description="Relative to the project path",
                ),
            ],
            icon="android.svg",
        )

    async def execute(self, input_data: WorkflowData) -> NodeExecuteResult:
        operation = self.get_parameter("operation", "runCommand")

        try:
            if operation == "runCommand":
                output = await self._run_command(self.get_client())
            elif operation == "cleanBuildFolder":
                output = await self._clean_build_folder()
            else:
                return self.failure(f"Unsupported operation: {operation}")

            output_key = self.get_parameter("outputKey")
            if output_key:
                output = {output_key: output}
            return self.success(input_data, output)

        except Exception as e:
            return self.failure(e)

    async def _run_command(self, runner: CommandRunner) -> Dict[str, Any]:
        self.validate_required_parameters(["command", "projectPath"])
        command = self.get_parameter("command")
        project_path = self.get_parameter("projectPath")

        ignore_failure = bool(self.get_parameter("ignoreFailure", False))
        timeout = float(self.get_parameter("timeout", 300))

        try:
            result = await runner.run(
                command, cwd=project_path, timeout=timeout, check=not ignore_failure
            )
        except CommandTimeout as e:
            if not ignore_failure:
                raise
            logger.warning("command_timeout_ignored", command=command, timeout=timeout)
            return {
                "command": command,
                "projectPath": project_path,
                "stdout": e.stdout,
                "stderr": e.stderr,
                "exitCode": None,
                "timedOut": True,
                "duration": timeout,
            }

        return {
            "command": command,
            "projectPath": project_path,
            "stdout": result.stdout,
            "stderr": result.stderr,
            "exitCode": result.returncode,
            "timedOut": False,
            "duration": result.duration,
        }

    async def _clean_build_folder(self) -> Dict[str, Any]:
        self.validate_required_parameters(["projectPath"])
        project_path = Path(self.get_parameter("projectPath"))
        if not project_path.is_dir():
            raise FileNotFoundError(f"Project directory not found: {project_path}")

        build_folder = project_path / self.get_parameter("buildFolder", DEFAULT_BUILD_FOLDER)
        removed = build_folder.exists()
        if removed:
            await asyncio.to_thread(shutil.rmtree, build_folder)

        return {
            "projectPath": str(project_path),
            "buildFolder": str(build_folder),
            "removed": removed,
        }
