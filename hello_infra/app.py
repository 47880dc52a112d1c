import os
import aws_cdk as cdk
from hello_infra.ec2_stack import Ec2Stack


def _setting(app: cdk.App, context_key: str, env_var: str, default=None):
    """CDK context (-c key=value) first, then the environment."""
    value = app.node.try_get_context(context_key)
    if value is None:
        value = os.environ.get(env_var, default)
    return value


def build_app(app: cdk.App | None = None) -> cdk.App:
    app = app or cdk.App()

    key_name = _setting(app, "key_name", "KEY_NAME")
    app_image = _setting(app, "app_image", "APP_IMAGE")
    if not key_name:
        raise ValueError("key_name is required (-c key_name=... or KEY_NAME)")
    if not app_image:
        raise ValueError("app_image is required (-c app_image=repo:tag or APP_IMAGE)")

    account = os.environ.get("CDK_DEFAULT_ACCOUNT")
    if not account:
        raise ValueError("CDK_DEFAULT_ACCOUNT is required (set by the cdk CLI or exported)")

    # Lookups (VPC, AMI) need an explicit account & region
    env = cdk.Environment(
        account=account,
        region=_setting(app, "region", "CDK_DEFAULT_REGION", "us-east-1"),
    )

    Ec2Stack(
        app,
        "HelloEc2Stack",
        key_name=key_name,
        app_image=app_image,
        instance_type=_setting(app, "instance_type", "INSTANCE_TYPE", "t2.micro"),
        app_port=int(_setting(app, "app_port", "APP_PORT", 3000)),
        env=env,
    )

    return app


if __name__ == "__main__":
    build_app().synth()
