# ec2_stack.py
# ------------------------------------------------------------
# Single EC2 host running the hello service in Docker
# ------------------------------------------------------------

from aws_cdk import (
    Stack,
    CfnOutput,
    aws_ec2 as ec2,
)
from constructs import Construct

# Canonical's account, newest Ubuntu 22.04 amd64 image wins
UBUNTU_OWNER = "099720109477"
UBUNTU_AMI_NAME = "ubuntu/images/hvm-ssd/ubuntu-jammy-22.04-amd64-server-*"

SECURITY_GROUP_NAME = "hello-app-sg"


def boot_script(app_image: str, container_name: str, app_port: int) -> list[str]:
    """
    Commands cloud-init runs once, on first boot.
    """
    return [
        "apt-get update -y",
        "apt-get install -y docker.io",
        "systemctl enable --now docker",
        "usermod -aG docker ubuntu",
        (
            f"docker run -d --name {container_name} "
            f"-p {app_port}:{app_port} -e PORT={app_port} --restart always {app_image}"
        ),
    ]


class Ec2Stack(Stack):
    """
    Ec2Stack creates one Ubuntu instance, its security group
    and a boot script that starts the app container.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        key_name: str,
        app_image: str,
        instance_type: str = "t2.micro",
        app_port: int = 3000,
        container_name: str = "hello-app",
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # ------------------------------------------------------------
        # 1. Use default VPC
        # ------------------------------------------------------------
        vpc = ec2.Vpc.from_lookup(
            self,
            "DefaultVPC",
            is_default=True
        )

        # ------------------------------------------------------------
        # 2. Security Group
        # ------------------------------------------------------------
        security_group = ec2.SecurityGroup(
            self,
            "AppSecurityGroup",
            vpc=vpc,
            security_group_name=SECURITY_GROUP_NAME,
            description="Allow SSH and app traffic",
            allow_all_outbound=True
        )

        security_group.add_ingress_rule(
            peer=ec2.Peer.any_ipv4(),
            connection=ec2.Port.tcp(22),
            description="Allow SSH access"
        )

        security_group.add_ingress_rule(
            peer=ec2.Peer.any_ipv4(),
            connection=ec2.Port.tcp(app_port),
            description="Allow app traffic"
        )

        # ------------------------------------------------------------
        # 3. Ubuntu AMI (name filter, most recent match)
        # ------------------------------------------------------------
        ubuntu_ami = ec2.MachineImage.lookup(
            name=UBUNTU_AMI_NAME,
            owners=[UBUNTU_OWNER],
        )

        # ------------------------------------------------------------
        # 4. User Data (boot-time commands, first boot only)
        # ------------------------------------------------------------
        user_data = ec2.UserData.for_linux()
        user_data.add_commands(*boot_script(app_image, container_name, app_port))

        # ------------------------------------------------------------
        # 5. EC2 Instance
        # ------------------------------------------------------------
        self.instance = ec2.Instance(
            self,
            "AppInstance",
            instance_type=ec2.InstanceType(instance_type),
            machine_image=ubuntu_ami,
            vpc=vpc,
            security_group=security_group,
            key_pair=ec2.KeyPair.from_key_pair_name(self, "KeyPair", key_name),
            user_data=user_data,
            # Editing the boot script must rebuild the host
            user_data_causes_replacement=True,
            vpc_subnets=ec2.SubnetSelection(
                subnet_type=ec2.SubnetType.PUBLIC
            )
        )

        # ------------------------------------------------------------
        # 6. Outputs
        # ------------------------------------------------------------
        CfnOutput(
            self,
            "InstancePublicIp",
            value=self.instance.instance_public_ip,
            description="Public IP of the app instance"
        )

        CfnOutput(
            self,
            "InstanceId",
            value=self.instance.instance_id,
            description="EC2 instance id"
        )
