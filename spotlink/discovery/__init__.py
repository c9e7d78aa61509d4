"""Zeroconf discovery: an HTTP endpoint advertised over multicast DNS that receives credentials."""