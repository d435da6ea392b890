"""Simple EC2 Manager for volume resize operations."""

from typing import Dict, List, Any, Optional
import boto3
from botocore.exceptions import ClientError
from ebs_resize.core.constants import (
    DEFAULT_AWS_REGION,
    LIVE_INSTANCE_STATES,
    SHUTDOWN_BEHAVIOR_ATTRIBUTE,
)
from ebs_resize.core.models import ServerInfo, SnapshotInfo, VolumeInfo
from ebs_resize.utils.ec2_utils import dict_to_tags, name_tag_filter
from ebs_resize.utils.exceptions import AwsOperationError
from ebs_resize.utils.logger import setup_logger

INSTANCE_NOT_FOUND_CODES = ("InvalidInstanceID.NotFound", "InvalidInstanceID.Malformed")


class EC2Manager:
    """AWS EC2 resource manager covering instances, volumes and snapshots.

    Every API failure is logged and re-raised as ``AwsOperationError``.
    """

    def __init__(self, session: boto3.Session, region: str = DEFAULT_AWS_REGION):
        """Initialize EC2Manager."""
        self.session = session
        self.region = region
        self.ec2_client = session.client("ec2", region_name=region)
        self.logger = setup_logger(__name__, "ec2_manager.log")

    def _call(self, operation: str, resource_id: Optional[str] = None, **params) -> Dict[str, Any]:
        try:
            return getattr(self.ec2_client, operation)(**params)
        except ClientError as e:
            error = e.response.get("Error", {})
            self.logger.error(f"Error calling {operation} on {resource_id or 'n/a'}: {e}")
            raise AwsOperationError(
                operation,
                error.get("Code", "Unknown"),
                error.get("Message", str(e)),
                resource_id,
            ) from e

    # Instances

    def describe_instances(
        self,
        filters: Optional[List[Dict[str, Any]]] = None,
        instance_ids: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        """Describe EC2 instances with optional filtering, across all pages."""
        params = {}
        if filters:
            params["Filters"] = filters
        if instance_ids:
            params["InstanceIds"] = instance_ids

        instances = []
        try:
            paginator = self.ec2_client.get_paginator("describe_instances")
            for page in paginator.paginate(**params):
                for reservation in page["Reservations"]:
                    instances.extend(reservation["Instances"])
        except ClientError as e:
            error = e.response.get("Error", {})
            self.logger.error(f"Error describing instances: {e}")
            raise AwsOperationError(
                "describe_instances",
                error.get("Code", "Unknown"),
                error.get("Message", str(e)),
                ",".join(instance_ids or []) or None,
            ) from e
        return instances

    def find_instances_by_name(self, name: str) -> List[ServerInfo]:
        """Find live instances whose Name tag equals ``name`` exactly."""
        filters = name_tag_filter(name) + [
            {"Name": "instance-state-name", "Values": list(LIVE_INSTANCE_STATES)}
        ]
        instances = self.describe_instances(filters=filters)
        # Filter values treat * and ? as wildcards; keep exact matches only
        servers = [ServerInfo.from_aws_instance(instance) for instance in instances]
        return [server for server in servers if server.get_tag("Name") == name]

    def get_instance(self, instance_id: str) -> Optional[ServerInfo]:
        """Describe one instance, or None when it does not exist."""
        try:
            instances = self.describe_instances(instance_ids=[instance_id])
        except AwsOperationError as e:
            if e.error_code in INSTANCE_NOT_FOUND_CODES:
                return None
            raise
        if not instances:
            return None
        return ServerInfo.from_aws_instance(instances[0])

    def get_instance_state(self, instance_id: str) -> str:
        """Current lifecycle state name of an instance."""
        response = self._call(
            "describe_instances", instance_id, InstanceIds=[instance_id]
        )
        for reservation in response["Reservations"]:
            for instance in reservation["Instances"]:
                return instance["State"]["Name"]
        raise AwsOperationError(
            "describe_instances", "NotFound", f"instance {instance_id} not returned", instance_id
        )

    def get_shutdown_behavior(self, instance_id: str) -> str:
        """Read the instance-initiated shutdown behavior attribute."""
        response = self._call(
            "describe_instance_attribute",
            instance_id,
            InstanceId=instance_id,
            Attribute=SHUTDOWN_BEHAVIOR_ATTRIBUTE,
        )
        return response.get("InstanceInitiatedShutdownBehavior", {}).get("Value", "")

    def start_instance(self, instance_id: str) -> None:
        """Start an EC2 instance."""
        self._call("start_instances", instance_id, InstanceIds=[instance_id])
        self.logger.info(f"Start requested for instance {instance_id}")

    def stop_instance(self, instance_id: str) -> None:
        """Stop an EC2 instance."""
        self._call("stop_instances", instance_id, InstanceIds=[instance_id])
        self.logger.info(f"Stop requested for instance {instance_id}")

    # Volumes

    def list_attached_volumes(self, instance_id: str) -> List[VolumeInfo]:
        """List the volumes attached to an instance."""
        response = self._call(
            "describe_volumes",
            instance_id,
            Filters=[{"Name": "attachment.instance-id", "Values": [instance_id]}],
        )
        return [VolumeInfo.from_aws_volume(volume) for volume in response["Volumes"]]

    def get_volume(self, volume_id: str) -> VolumeInfo:
        """Describe one volume."""
        response = self._call("describe_volumes", volume_id, VolumeIds=[volume_id])
        volumes = response["Volumes"]
        if not volumes:
            raise AwsOperationError(
                "describe_volumes", "NotFound", f"volume {volume_id} not returned", volume_id
            )
        return VolumeInfo.from_aws_volume(volumes[0])

    def create_volume(
        self,
        snapshot_id: str,
        size: int,
        availability_zone: str,
        volume_type: str,
        iops: Optional[int] = None,
        throughput: Optional[int] = None,
    ) -> VolumeInfo:
        """Create a volume from a snapshot."""
        params = {
            "SnapshotId": snapshot_id,
            "Size": size,
            "AvailabilityZone": availability_zone,
            "VolumeType": volume_type,
        }
        if iops:
            params["Iops"] = iops
        if throughput:
            params["Throughput"] = throughput

        response = self._call("create_volume", snapshot_id, **params)
        self.logger.info(
            f"Created volume {response['VolumeId']} ({size} GiB {volume_type}) "
            f"from {snapshot_id} in {availability_zone}"
        )
        return VolumeInfo.from_aws_volume(response)

    def detach_volume(self, volume_id: str, instance_id: str, device: str) -> None:
        """Detach a volume from an instance."""
        self._call(
            "detach_volume",
            volume_id,
            VolumeId=volume_id,
            InstanceId=instance_id,
            Device=device,
        )
        self.logger.info(f"Detach requested for {volume_id} from {instance_id} at {device}")

    def attach_volume(self, volume_id: str, instance_id: str, device: str) -> None:
        """Attach a volume to an instance."""
        self._call(
            "attach_volume",
            volume_id,
            VolumeId=volume_id,
            InstanceId=instance_id,
            Device=device,
        )
        self.logger.info(f"Attach requested for {volume_id} to {instance_id} at {device}")

    # Snapshots

    def create_snapshot(self, volume_id: str, description: str) -> SnapshotInfo:
        """Create a snapshot of a volume."""
        response = self._call(
            "create_snapshot", volume_id, VolumeId=volume_id, Description=description
        )
        self.logger.info(f"Created snapshot {response['SnapshotId']} of {volume_id}")
        return SnapshotInfo.from_aws_snapshot(response)

    def get_snapshot(self, snapshot_id: str) -> SnapshotInfo:
        """Describe one snapshot."""
        response = self._call(
            "describe_snapshots", snapshot_id, SnapshotIds=[snapshot_id]
        )
        snapshots = response["Snapshots"]
        if not snapshots:
            raise AwsOperationError(
                "describe_snapshots", "NotFound", f"snapshot {snapshot_id} not returned", snapshot_id
            )
        return SnapshotInfo.from_aws_snapshot(snapshots[0])

    # Tags

    def create_tags(self, resource_id: str, tags: Dict[str, str]) -> None:
        """Apply tags to a resource; an empty mapping is a no-op."""
        if not tags:
            return
        self._call(
            "create_tags", resource_id, Resources=[resource_id], Tags=dict_to_tags(tags)
        )
        self.logger.debug(f"Tagged {resource_id} with {sorted(tags)}")


def create_ec2_manager(session: boto3.Session, region: str = DEFAULT_AWS_REGION) -> EC2Manager:
    """Create EC2Manager instance."""
    return EC2Manager(session, region)
