"""Android build workflow definitions."""

from typing import List, Optional

from core.config import Settings, get_settings
from core.workflow.models import WorkflowDefinition, WorkflowNode
from workflows.base import chain_connections, position

RELEASE_BUILD_COMMAND = "./gradlew assembleRelease --stacktrace -PreactNativeArchitectures=arm64-v8a"


def create_android_workflow(
    command: str,
    project_path: str,
    settings: Optional[Settings] = None,
) -> WorkflowDefinition:
    settings = settings or get_settings()
    node = WorkflowNode(
        id="android-node-1",
        type="android",
        name="Execute Android Command",
        position=position(0),
        parameters={
            "operation": "runCommand",
            "command": command,
            "projectPath": project_path,
            "timeout": settings.android_command_timeout,
        },
    )
    return WorkflowDefinition(
        id="android-command-workflow",
        name="Android Command",
        nodes=(node,),
        connections={node.id: []},
    )


def create_android_release_workflow(
    project_path: str,
    run_gradle_clean: bool = False,
    settings: Optional[Settings] = None,
) -> WorkflowDefinition:
    """
    yarn install, delete android/app/build, optionally ``gradlew clean``,
    then ``gradlew assembleRelease``. A failing gradle clean does not stop
    the build.
    """
    settings = settings or get_settings()
    timeout = settings.android_command_timeout

    def command_node(node_id: str, name: str, command: str, output_key: str, **extra) -> WorkflowNode:
        return WorkflowNode(
            id=node_id,
            type="android",
            name=name,
            position=position(len(nodes)),
            parameters={
                "operation": "runCommand",
                "command": command,
                "projectPath": project_path,
                "timeout": timeout,
                "outputKey": output_key,
                **extra,
            },
        )

    nodes: List[WorkflowNode] = []
    nodes.append(command_node("android-yarn-install", "Yarn Install", "yarn install", "yarnInstall"))
    nodes.append(WorkflowNode(
        id="android-clean-build-folder",
        type="android",
        name="Delete Build Folder",
        position=position(len(nodes)),
        parameters={
            "operation": "cleanBuildFolder",
            "projectPath": project_path,
            "outputKey": "cleanBuildFolder",
        },
    ))
    if run_gradle_clean:
        nodes.append(command_node(
            "android-gradle-clean",
            "Gradle Clean",
            "cd android && ./gradlew clean",
            "gradleClean",
            ignoreFailure=True,
        ))
    nodes.append(command_node(
        "android-assemble-release",
        "Assemble Release",
        f"cd android && {RELEASE_BUILD_COMMAND}",
        "assembleRelease",
    ))

    return WorkflowDefinition(
        id="android-release-workflow",
        name="Android Release Build",
        nodes=tuple(nodes),
        connections=chain_connections(nodes),
        settings={"runGradleClean": run_gradle_clean},
    )
