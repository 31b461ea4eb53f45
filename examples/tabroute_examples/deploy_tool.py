""" Sample application
Deploys tagged versions to environments, with dynamic shell completion:
- environments and tags come from completion sources, with descriptions
- the deployment mode enum is completed from its members
- `deploy-tool --install-completion` writes the script for your shell
"""

import sys
from enum import Enum

from tabroute import App
from tabroute.completion import CompletionCandidate, CompletionSourceRegistry, EnumCompletionSource

ENVIRONMENTS = {
    "production": "Production environment (use with caution)",
    "staging": "Staging environment for final testing",
    "development": "Development environment for active work",
    "qa": "Quality assurance testing environment",
}

TAGS = {
    "v2.1.0": "Current release",
    "v2.0.5": "Previous stable release",
    "v1.9.12": "Release v1.9.12",
    "latest": "Latest stable release",
}


class DeploymentMode(Enum):
    Fast = "fast"
    Standard = "standard"
    BlueGreen = "blue-green"
    Canary = "canary"


app = App("deploy-tool")
app.register_enum(DeploymentMode, "mode")


@app.route("deploy {env} --version {tag}")
def deploy(env: str, tag: str) -> None:
    "Deploy a version to an environment"
    print(f"Deploying {tag} to {env}")


@app.route("deploy {env} --mode {mode:mode}")
def deploy_with_mode(env: str, mode: DeploymentMode) -> None:
    "Deploy with a specific mode"
    print(f"Deploying to {env} in {mode.name} mode")


@app.route("list-environments")
def list_environments() -> None:
    "List all available environments"
    for name in ENVIRONMENTS:
        print(f"  - {name}")


@app.route("status")
def status() -> None:
    "Check system status"
    print("System status: OK")


def environments(context):
    return [CompletionCandidate(name, description) for name, description in ENVIRONMENTS.items()]


def configure(sources: CompletionSourceRegistry) -> None:
    sources.register_for_parameter("env", environments)
    sources.register_for_parameter("tag", lambda context: [CompletionCandidate(t, d) for t, d in TAGS.items()])
    sources.register_for_type(DeploymentMode, EnumCompletionSource(DeploymentMode))


app.enable_dynamic_completion(configure)

if __name__ == "__main__":
    sys.exit(app.run())
