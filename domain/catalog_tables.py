from __future__ import annotations

from domain.models import BORDER_DASHED, BORDER_DOTTED, BORDER_SOLID

# (service_id, canonical name, color, category)
ServiceRow = tuple[str, str, str, str]

_USER: ServiceRow = ("user", "User", "#4F46E5", "Actors")
_DEVELOPER: ServiceRow = ("developer", "Developer", "#7C3AED", "Actors")
_AWS_CLOUD: ServiceRow = ("aws", "AWS Cloud", "#FF9900", "Cloud")
_BRANCH: ServiceRow = ("branch", "Branch", "#22C55E", "DevOps")

_COMPUTE = "#FF9900"
_DATABASE = "#527FFF"
_STORAGE = "#569A31"
_NETWORKING = "#FF6B6B"
_INTEGRATION = "#A855F7"
_MANAGEMENT = "#10B981"
_DEVOPS = "#6B7280"
_GIT = "#374151"

LABEL_SERVICE_ROWS: dict[str, ServiceRow] = {
    "User": _USER,
    "Developer": _DEVELOPER,
    "EC2": ("ec2", "EC2", _COMPUTE, "Compute"),
    "Lambda": ("lambda", "Lambda", _COMPUTE, "Compute"),
    "ECS Fargate": ("ecs-fargate", "ECS Fargate", _COMPUTE, "Compute"),
    "ECR": ("ecr", "ECR", _STORAGE, "Storage"),
    "RDS": ("rds", "RDS", _DATABASE, "Database"),
    "DynamoDB": ("dynamodb", "DynamoDB", _DATABASE, "Database"),
    "Aurora": ("aurora", "Aurora", _DATABASE, "Database"),
    "ElastiCache": ("elasticache", "ElastiCache", _DATABASE, "Database"),
    "S3": ("s3", "S3", _STORAGE, "Storage"),
    "VPC": ("vpc", "VPC", _NETWORKING, "Networking"),
    "VPC (staging)": ("vpc", "VPC", _NETWORKING, "Networking"),
    "ALB": ("alb", "ALB", _NETWORKING, "Networking"),
    "Direct Connect": ("direct-connect", "Direct Connect", _NETWORKING, "Networking"),
    "Transit Gateway": ("transit-gateway", "Transit Gateway", _NETWORKING, "Networking"),
    "VPC Peering": ("vpc-peering", "VPC Peering", _NETWORKING, "Networking"),
    "NAT Gateway": ("nat-gateway", "NAT Gateway", _NETWORKING, "Networking"),
    "Internet Gateway": ("internet-gateway", "Internet Gateway", _NETWORKING, "Networking"),
    "VPN Gateway": ("vpn-gateway", "VPN Gateway", _NETWORKING, "Networking"),
    "Customer Gateway": ("customer-gateway", "Customer Gateway", _NETWORKING, "Networking"),
    "On-Premises": ("on-premises", "On-Premises", "#6B7280", "Infrastructure"),
    "Data Center": ("data-center", "Data Center", "#374151", "Infrastructure"),
    "Corporate Network": ("corporate-network", "Corporate Network", "#4B5563", "Infrastructure"),
    "API Gateway": ("api-gateway", "API Gateway", _INTEGRATION, "Integration"),
    "CloudWatch": ("cloudwatch", "CloudWatch", _MANAGEMENT, "Management"),
    "CodeBuild": ("codebuild", "CodeBuild", _DEVOPS, "DevOps"),
    "CodePipeline": ("codepipeline", "CodePipeline", _DEVOPS, "DevOps"),
    "CodeConnection": ("codeconnection", "CodeConnection", _DEVOPS, "DevOps"),
    "GitHub": ("github", "GitHub", _GIT, "DevOps"),
    "Repository": ("repository", "Repository", _GIT, "DevOps"),
    "Branch": _BRANCH,
    "Pull Request": ("pull-request", "Pull Request", "#3B82F6", "DevOps"),
    "Commit": ("commit", "Commit", "#8B5CF6", "DevOps"),
    "main": _BRANCH,
    "develop": _BRANCH,
    "master": _BRANCH,
    "feature": _BRANCH,
    "AWS": _AWS_CLOUD,
}

ICON_SERVICE_ROWS: dict[str, ServiceRow] = {
    "user": _USER,
    "on-premises-server": ("on-premises", "On-Premises", "#6B7280", "Infrastructure"),
    "data-center": ("data-center", "Data Center", "#374151", "Infrastructure"),
    "corporate-network": ("corporate-network", "Corporate Network", "#4B5563", "Infrastructure"),
    "aws-cloud": _AWS_CLOUD,
    "aws-ec2": ("ec2", "EC2", _COMPUTE, "Compute"),
    "aws-lambda": ("lambda", "Lambda", _COMPUTE, "Compute"),
    "aws-fargate": ("ecs-fargate", "ECS Fargate", _COMPUTE, "Compute"),
    "aws-ecs": ("ecs", "ECS", _COMPUTE, "Compute"),
    "aws-eks": ("eks", "EKS", _COMPUTE, "Compute"),
    "aws-batch": ("batch", "Batch", _COMPUTE, "Compute"),
    "aws-rds": ("rds", "RDS", _DATABASE, "Database"),
    "aws-aurora": ("aurora", "Aurora", _DATABASE, "Database"),
    "aws-elasticache": ("elasticache", "ElastiCache", _DATABASE, "Database"),
    "aws-dynamodb": ("dynamodb", "DynamoDB", _DATABASE, "Database"),
    "aws-redshift": ("redshift", "Redshift", _DATABASE, "Database"),
    "aws-documentdb": ("documentdb", "DocumentDB", _DATABASE, "Database"),
    "aws-simple-storage-service": ("s3", "S3", _STORAGE, "Storage"),
    "aws-elastic-container-registry": ("ecr", "ECR", _STORAGE, "Storage"),
    "aws-efs": ("efs", "EFS", _STORAGE, "Storage"),
    "aws-fsx": ("fsx", "FSx", _STORAGE, "Storage"),
    "aws-glacier": ("glacier", "Glacier", _STORAGE, "Storage"),
    "aws-vpc": ("vpc", "VPC", _NETWORKING, "Networking"),
    "aws-elb-application-load-balancer": ("alb", "ALB", _NETWORKING, "Networking"),
    "aws-elastic-load-balancing": ("elb", "ELB", _NETWORKING, "Networking"),
    "aws-cloudfront": ("cloudfront", "CloudFront", _NETWORKING, "Networking"),
    "aws-route-53": ("route53", "Route 53", _NETWORKING, "Networking"),
    "aws-direct-connect": ("direct-connect", "Direct Connect", _NETWORKING, "Networking"),
    "aws-transit-gateway": ("transit-gateway", "Transit Gateway", _NETWORKING, "Networking"),
    "aws-vpc-peering": ("vpc-peering", "VPC Peering", _NETWORKING, "Networking"),
    "aws-nat-gateway": ("nat-gateway", "NAT Gateway", _NETWORKING, "Networking"),
    "aws-internet-gateway": ("internet-gateway", "Internet Gateway", _NETWORKING, "Networking"),
    "aws-vpn-gateway": ("vpn-gateway", "VPN Gateway", _NETWORKING, "Networking"),
    "aws-customer-gateway": ("customer-gateway", "Customer Gateway", _NETWORKING, "Networking"),
    "aws-api-gateway": ("api-gateway", "API Gateway", _INTEGRATION, "Integration"),
    "aws-simple-notification-service": ("sns", "SNS", _INTEGRATION, "Integration"),
    "aws-simple-queue-service": ("sqs", "SQS", _INTEGRATION, "Integration"),
    "aws-step-functions": ("step-functions", "Step Functions", _INTEGRATION, "Integration"),
    "aws-eventbridge": ("eventbridge", "EventBridge", _INTEGRATION, "Integration"),
    "aws-appsync": ("app-sync", "AppSync", _INTEGRATION, "Integration"),
    "aws-cloudwatch": ("cloudwatch", "CloudWatch", _MANAGEMENT, "Management"),
    "aws-cloudformation": ("cloudformation", "CloudFormation", _MANAGEMENT, "Management"),
    "aws-systems-manager": ("systems-manager", "Systems Manager", _MANAGEMENT, "Management"),
    "aws-codebuild": ("codebuild", "CodeBuild", _DEVOPS, "DevOps"),
    "aws-codepipeline": ("codepipeline", "CodePipeline", _DEVOPS, "DevOps"),
    "aws-codestar": ("codeconnection", "CodeConnection", _DEVOPS, "DevOps"),
    "github": ("github", "GitHub", _GIT, "DevOps"),
    "git-repository": ("repository", "Repository", _GIT, "DevOps"),
    "git-branch": _BRANCH,
    "git-pull-request": ("pull-request", "Pull Request", "#3B82F6", "DevOps"),
    "git-commit": ("commit", "Commit", "#8B5CF6", "DevOps"),
}

SERVICE_ICONS: dict[str, str] = {
    "User": "user",
    "Developer": "user",
    "EC2": "aws-ec2",
    "Lambda": "aws-lambda",
    "ECS": "aws-elastic-container-service",
    "ECS Fargate": "aws-fargate",
    "ECR": "aws-elastic-container-registry",
    "EKS": "aws-elastic-kubernetes-service",
    "Batch": "aws-batch",
    "RDS": "aws-rds",
    "DynamoDB": "aws-dynamodb",
    "Aurora": "aws-aurora",
    "ElastiCache": "aws-elasticache",
    "Redshift": "aws-redshift",
    "DocumentDB": "aws-documentdb",
    "S3": "aws-simple-storage-service",
    "EFS": "aws-efs",
    "FSx": "aws-fsx",
    "Glacier": "aws-simple-storage-service-glacier",
    "On-Premises": "on-premises-server",
    "Data Center": "data-center",
    "Corporate Network": "corporate-network",
    "CloudFront": "aws-cloudfront",
    "VPC": "aws-vpc",
    "ELB": "aws-elastic-load-balancing",
    "ALB": "aws-elb-application-load-balancer",
    "Route 53": "aws-route-53",
    "Direct Connect": "aws-direct-connect",
    "Transit Gateway": "aws-transit-gateway",
    "VPC Peering": "aws-vpc-peering",
    "NAT Gateway": "aws-nat-gateway",
    "Internet Gateway": "aws-internet-gateway",
    "VPN Gateway": "aws-vpn-gateway",
    "Customer Gateway": "aws-customer-gateway",
    "API Gateway": "aws-api-gateway",
    "SNS": "aws-simple-notification-service",
    "SQS": "aws-simple-queue-service",
    "Step Functions": "aws-step-functions",
    "EventBridge": "aws-eventbridge",
    "AppSync": "aws-appsync",
    "CloudWatch": "aws-cloudwatch",
    "CloudFormation": "aws-cloudformation",
    "CloudTrail": "aws-cloudtrail",
    "Config": "aws-config",
    "Systems Manager": "aws-systems-manager",
    "X-Ray": "aws-x-ray",
    "Organizations": "aws-organizations",
    "Cognito": "aws-cognito",
    "ACM": "aws-certificate-manager",
    "IAM": "aws-identity-and-access-management",
    "KMS": "aws-key-management-service",
    "Secrets Manager": "aws-secrets-manager",
    "WAF": "aws-waf",
    "Shield": "aws-shield",
    "Inspector": "aws-inspector",
    "GuardDuty": "aws-guardduty",
    "Verified Access": "aws-verified-access",
    "Kinesis": "aws-kinesis",
    "Kinesis Firehose": "aws-kinesis-firehose",
    "Kinesis Analytics": "aws-kinesis-data-analytics",
    "Glue": "aws-glue",
    "Athena": "aws-athena",
    "EMR": "aws-emr",
    "OpenSearch": "aws-opensearch-service",
    "QuickSight": "aws-quicksight",
    "SageMaker": "aws-sagemaker",
    "Comprehend": "aws-comprehend",
    "Rekognition": "aws-rekognition",
    "Textract": "aws-textract",
    "Translate": "aws-translate",
    "Polly": "aws-polly",
    "Lex": "aws-lex",
    "Bedrock": "aws-bedrock",
    "IoT Core": "aws-iot-core",
    "IoT Device Management": "aws-iot-device-management",
    "IoT Analytics": "aws-iot-analytics",
    "IoT Greengrass": "aws-iot-greengrass",
    "IoT SiteWise": "aws-iot-sitewise",
    "CodeBuild": "aws-codebuild",
    "CodePipeline": "aws-codepipeline",
    "CodeDeploy": "aws-codedeploy",
    "CodeCommit": "aws-codecommit",
    "CodeArtifact": "aws-codeartifact",
    "CodeConnection": "aws-codestar",
    "GitHub": "github",
}
DEFAULT_SERVICE_ICON = "aws-ec2"

# (keywords, color, border style); first match wins.
GROUP_STYLE_ROWS: list[tuple[tuple[str, ...], str, str]] = [
    (("vpc",), "#FF6B6B", BORDER_SOLID),
    (("subnet",), "#94A3B8", BORDER_DASHED),
    (("aws", "cloud"), "#FF9900", BORDER_SOLID),
    (("github",), "#374151", BORDER_SOLID),
    (("on-premises", "on premises"), "#6B7280", BORDER_SOLID),
    (("data center", "datacenter"), "#374151", BORDER_SOLID),
    (("corporate", "corp"), "#4B5563", BORDER_DASHED),
    (("rack",), "#6B7280", BORDER_DOTTED),
    (("network zone", "zone"), "#9CA3AF", BORDER_DASHED),
]
DEFAULT_GROUP_STYLE_ROW: tuple[str, str] = ("#FF6B6B", BORDER_SOLID)

# (keywords, icon); checked before falling back to the first contained node.
GROUP_ICON_ROWS: list[tuple[tuple[str, ...], str]] = [
    (("aws", "cloud"), "aws-cloud"),
    (("github",), "github"),
]
DEFAULT_GROUP_ICON = "aws-vpc"
