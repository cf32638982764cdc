"""Issue, cluster and scan status payloads for a SaaS workspace."""