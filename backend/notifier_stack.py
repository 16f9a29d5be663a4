from __future__ import annotations

from pathlib import Path

from aws_cdk import (
    DockerVolume,
    Duration,
    Stack,
    Tags,
    CfnOutput,
    aws_lambda as lambda_,
    aws_lambda_python_alpha as lambda_python,
    aws_ssm as ssm,
)
from constructs import Construct


class FlowdockNotifierStack(Stack):
    """Deploys the Lambda that relays events to the flowdock-notifier binary."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        stage: str,
        binary_path: Path,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)
        Tags.of(self).add("Stage", stage)

        lambda_src = Path(__file__).resolve().parent / "lambda_src"
        binary_path = binary_path.resolve()

        shared_layer = lambda_python.PythonLayerVersion(
            self,
            "SharedUtilitiesLayer",
            entry=str(lambda_src / "common_layer"),
            compatible_runtimes=[lambda_.Runtime.PYTHON_3_11],
            bundling=lambda_python.BundlingOptions(
                image=lambda_.Runtime.PYTHON_3_11.bundling_image,
                command=[
                    "bash",
                    "-c",
                    "mkdir -p /asset-output/python && cp -r /asset-input/python/. /asset-output/python",
                ],
            ),
        )

        # The handler launches ./flowdock-notifier relative to the task root.
        function_bundling = lambda_python.BundlingOptions(
            image=lambda_.Runtime.PYTHON_3_11.bundling_image,
            command=[
                "bash",
                "-c",
                "mkdir -p /asset-output && "
                "cp -r /asset-input/flowdock_notifier /asset-output/flowdock_notifier && "
                f"cp /notifier-bin/{binary_path.name} /asset-output/flowdock-notifier && "
                "chmod 755 /asset-output/flowdock-notifier",
            ],
            volumes=[
                DockerVolume(
                    host_path=str(binary_path.parent),
                    container_path="/notifier-bin",
                )
            ],
        )

        environment: dict[str, str] = {}
        token_param_name = self.node.try_get_context("flowdockTokenParameterName")
        if token_param_name:
            environment["FLOWDOCK_TOKEN_PARAMETER"] = token_param_name

        notifier_lambda = lambda_python.PythonFunction(
            self,
            "FlowdockNotifierLambda",
            entry=str(lambda_src),
            index="flowdock_notifier/handler.py",
            handler="handler",
            runtime=lambda_.Runtime.PYTHON_3_11,
            timeout=Duration.seconds(60),
            memory_size=256,
            environment=environment,
            layers=[shared_layer],
            bundling=function_bundling,
        )

        if token_param_name:
            token_param = ssm.StringParameter.from_secure_string_parameter_attributes(
                self,
                "FlowdockTokenParameter",
                parameter_name=token_param_name,
            )
            token_param.grant_read(notifier_lambda)

        CfnOutput(
            self,
            "FlowdockNotifierFunctionName",
            value=notifier_lambda.function_name,
            description="Name of the Lambda function that runs flowdock-notifier",
        )
